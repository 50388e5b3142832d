from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Tuple

from symbolicmath.config import render_config
from symbolicmath.errors import MonomialDegreeMismatchError, UnsupportedInputError

from .expr import Container, Kind, ScalarExpression, expression_class
from .variable import Variable, unique_vars


@expression_class(Container.SCALAR, Kind.MONOMIAL)
@dataclass(frozen=True)
class Monomial(ScalarExpression):
    """A coefficient times a product of variables raised to integer powers.

    ``Monomial(3.0, (x, y), (2, 1))`` represents ``3 x^2 y``. A monomial with
    no variable factors is a constant.

    Attributes:
        coefficient: Real multiplier
        variable_factors: Variables of the product, in order of appearance
        exponents: Exponent of each variable factor (same length as variable_factors)
    """

    coefficient: float
    variable_factors: Tuple[Variable, ...] = ()
    exponents: Tuple[int, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "coefficient", float(self.coefficient))
        object.__setattr__(self, "variable_factors", tuple(self.variable_factors))
        object.__setattr__(self, "exponents", tuple(self.exponents))

    def check(self) -> None:
        if len(self.exponents) != len(self.variable_factors):
            raise MonomialDegreeMismatchError(len(self.exponents), len(self.variable_factors))
        for v in self.variable_factors:
            if not isinstance(v, Variable):
                raise UnsupportedInputError("Monomial.check", v)
            v.check()

    def variables(self) -> List[Variable]:
        return unique_vars(self.variable_factors)

    def constant(self) -> float:
        return self.coefficient if self.is_constant() else 0.0

    def degree(self) -> int:
        return sum(self.exponents)

    def is_constant(self) -> bool:
        # factors raised to the power 0 do not count
        return self.degree() == 0

    def is_variable(self, v: Variable) -> bool:
        """True if the monomial is exactly ``c * v`` for some coefficient c."""
        return self.variable_factors == (v,) and self.exponents == (1,)

    def exponent_of(self, v: Variable) -> int:
        """Total exponent of ``v`` in the monomial (0 if absent)."""
        return sum(e for f, e in zip(self.variable_factors, self.exponents) if f == v)

    def signature(self) -> FrozenSet[Tuple[int, int]]:
        """Order-independent form of the monomial: ``{(variable id, exponent)}``."""
        totals: Dict[int, int] = {}
        for v, e in zip(self.variable_factors, self.exponents):
            totals[v.id] = totals.get(v.id, 0) + e
        return frozenset((var_id, e) for var_id, e in totals.items() if e != 0)

    def matches_form_of(self, other: "Monomial") -> bool:
        """True if both monomials have the same variables with the same exponents."""
        return self.signature() == other.signature()

    def with_coefficient(self, coefficient: float) -> "Monomial":
        return Monomial(coefficient, self.variable_factors, self.exponents)

    def to_monomial(self) -> "Monomial":
        return self

    def to_polynomial(self):
        from .polynomial import Polynomial

        return Polynomial((self,))

    def __str__(self):
        coefficient = render_config.format_float(self.coefficient)
        if self.is_constant():
            return coefficient
        factors = []
        for v, e in zip(self.variable_factors, self.exponents):
            factors.append(str(v) if e == 1 else f"{v}^{e}")
        body = " ".join(factors)
        if self.coefficient == 1.0:
            return body
        return f"{coefficient} {body}"

    def __repr__(self):
        return f"Monomial({self})"


def monomial_product(left: Monomial, right: Monomial) -> Monomial:
    """Multiply two monomials, adding exponents of shared variables.

    Factors keep the order of ``left`` followed by the new factors of ``right``.
    """
    factors = list(left.variable_factors)
    exponents = list(left.exponents)
    for v, e in zip(right.variable_factors, right.exponents):
        if v in factors:
            idx = factors.index(v)
            exponents[idx] += e
        else:
            factors.append(v)
            exponents.append(e)
    return Monomial(left.coefficient * right.coefficient, tuple(factors), tuple(exponents))
