from dataclasses import dataclass
from numbers import Real
from typing import List

from symbolicmath.config import render_config
from symbolicmath.errors import UnsupportedInputError

from .expr import Container, Kind, ScalarExpression, expression_class


@expression_class(Container.SCALAR, Kind.CONSTANT)
@dataclass(frozen=True)
class Constant(ScalarExpression):
    """A single real number.

    Constants are always valid. Raw Python and numpy numbers passed to any
    operation are wrapped as Constants automatically.

    Attributes:
        value: The wrapped real number

    Example:
        >>> c = Constant(3.14)
        >>> c.plus(1.0)
        Const(4.140000000000001)
    """

    value: float

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, Real):
            raise UnsupportedInputError("Constant", self.value)
        object.__setattr__(self, "value", float(self.value))

    def check(self) -> None:
        return None

    def variables(self) -> List:
        return []

    def constant(self) -> float:
        return self.value

    def degree(self) -> int:
        return 0

    def to_monomial(self):
        from .monomial import Monomial

        return Monomial(self.value, (), ())

    def to_polynomial(self):
        from .polynomial import Polynomial

        return Polynomial((self.to_monomial(),))

    def __float__(self):
        return self.value

    def __str__(self):
        return render_config.format_float(self.value)

    def __repr__(self):
        return f"Const({self.value!r})"
