import itertools
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

import numpy as np

from symbolicmath.config import render_config
from symbolicmath.errors import UnallocatedVariableError, VariableBoundsError

from .expr import Container, Kind, ScalarExpression, expression_class


class VarType(Enum):
    """Type of a decision variable (continuous or binary)."""

    CONTINUOUS = "C"
    BINARY = "B"


# Process-wide id counter shared by every Environment. The lock keeps ids
# unique when variables are allocated from several threads.
_ID_COUNTER = itertools.count()
_ID_LOCK = threading.Lock()


def _next_id() -> int:
    with _ID_LOCK:
        return next(_ID_COUNTER)


@expression_class(Container.SCALAR, Kind.VARIABLE)
@dataclass(frozen=True)
class Variable(ScalarExpression):
    """An unknown scalar quantity, identified only by its id.

    Variables must be created through an allocator (:func:`new_variable` or
    :meth:`Environment.new_variable`). Two variables are equal if and only if
    they share an id; bounds, type and name never take part in comparison or
    hashing. A ``Variable()`` built directly has no id and fails :meth:`check`.

    Attributes:
        id: Unique integer id, or None for an unallocated variable
        lower: Lower bound of the variable
        upper: Upper bound of the variable
        type: Continuous or binary
        name: Display name, ``x_<id>`` by default
    """

    id: Optional[int] = None
    lower: float = field(default=-np.inf, compare=False)
    upper: float = field(default=np.inf, compare=False)
    type: VarType = field(default=VarType.CONTINUOUS, compare=False)
    name: str = field(default="", compare=False)

    def check(self) -> None:
        if self.id is None:
            raise UnallocatedVariableError(self)
        if self.lower >= self.upper:
            raise VariableBoundsError(self.lower, self.upper)

    def variables(self) -> List["Variable"]:
        return [self]

    def constant(self) -> float:
        return 0.0

    def degree(self) -> int:
        return 1

    def to_monomial(self):
        from .monomial import Monomial

        return Monomial(1.0, (self,), (1,))

    def to_polynomial(self):
        from .polynomial import Polynomial

        return Polynomial((self.to_monomial(),))

    def __str__(self):
        if self.name:
            return self.name
        if self.id is None:
            return "x_?"
        return f"{render_config.variable_prefix}{self.id}"

    def __repr__(self):
        return f"Var('{self}')"


class Environment:
    """Allocation context for variables.

    Every environment draws ids from the same process-wide counter, so ids stay
    unique across environments; the environment only records which variables
    were created through it.

    Example:
        >>> env = Environment("model")
        >>> x = env.new_variable()
        >>> env.variables == [x]
        True
    """

    def __init__(self, name: str = "Background"):
        self.name = name
        self.variables: List[Variable] = []

    def new_variable(
        self,
        lower: float = -np.inf,
        upper: float = np.inf,
        type: VarType = VarType.CONTINUOUS,
        name: Optional[str] = None,
    ) -> Variable:
        var_id = _next_id()
        if name is None:
            name = f"{render_config.variable_prefix}{var_id}"
        v = Variable(id=var_id, lower=lower, upper=upper, type=type, name=name)
        self.variables.append(v)
        return v

    def __repr__(self):
        return f"Environment({self.name!r}, n_variables={len(self.variables)})"


BACKGROUND_ENVIRONMENT = Environment("Background")


def new_variable(env: Optional[Environment] = None, **kwargs) -> Variable:
    """Allocate a new continuous variable with bounds ``(-inf, inf)``.

    Args:
        env: Environment to record the variable in (default: the background environment)
        **kwargs: Forwarded to :meth:`Environment.new_variable`

    Returns:
        Variable: A freshly allocated variable
    """
    env = env if env is not None else BACKGROUND_ENVIRONMENT
    return env.new_variable(**kwargs)


def new_binary_variable(env: Optional[Environment] = None) -> Variable:
    env = env if env is not None else BACKGROUND_ENVIRONMENT
    return env.new_variable(lower=0.0, upper=1.0, type=VarType.BINARY)


def unique_vars(vars_in: Iterable[Variable]) -> List[Variable]:
    """Return the unique variables of ``vars_in`` in first-seen order."""
    seen = set()
    out = []
    for v in vars_in:
        if v.id not in seen:
            seen.add(v.id)
            out.append(v)
    return out
