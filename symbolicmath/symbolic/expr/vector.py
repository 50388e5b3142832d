"""Column-vector expressions.

Each scalar kind has a vector form holding a non-empty tuple of elements of
that kind. Vectors are column vectors: ``dims == (len(v), 1)``. Transposing a
vector gives a one-row matrix of the same kind.

Example:
    Building vectors::

        x = new_variable_vector(3)
        b = ConstantVector([1.0, 2.0, 3.0])
        r = x.plus(b)  # PolynomialVector, each element x_i + b_i
"""

from dataclasses import dataclass
from numbers import Real
from typing import Iterator, Optional, Tuple

import numpy as np

from symbolicmath.errors import (
    EmptyVectorError,
    InvalidVectorIndexError,
    UnsupportedInputError,
)

from .constant import Constant
from .expr import (
    Container,
    Expression,
    Kind,
    ScalarExpression,
    class_for,
    expression_class,
    promote,
)
from .variable import Environment, new_variable


@dataclass(frozen=True)
class VectorExpression(Expression):
    """Base class of the four vector kinds.

    Attributes:
        elements: Scalar elements of the vector, top to bottom
    """

    elements: Tuple[ScalarExpression, ...]

    def __post_init__(self):
        object.__setattr__(self, "elements", tuple(self.elements))

    @property
    def dims(self) -> Tuple[int, int]:
        return (len(self.elements), 1)

    def check(self) -> None:
        if len(self.elements) == 0:
            raise EmptyVectorError(self)
        element_cls = class_for(Container.SCALAR, self.kind)
        for element in self.elements:
            if not isinstance(element, element_cls):
                raise UnsupportedInputError(f"{self.__class__.__name__}.check", element)
            element.check()

    def grid(self):
        return tuple((element,) for element in self.elements)

    def __len__(self):
        return len(self.elements)

    def __iter__(self) -> Iterator[ScalarExpression]:
        return iter(self.elements)

    def len(self) -> int:
        return len(self.elements)

    def at_vec(self, idx: int) -> ScalarExpression:
        """Element ``idx`` of the vector.

        Raises:
            InvalidVectorIndexError: If ``idx`` is outside ``[0, len)``
        """
        self.check()
        if idx < 0 or idx >= len(self.elements):
            raise InvalidVectorIndexError(idx, self)
        return self.elements[idx]

    def constant(self) -> np.ndarray:
        """Constant part of every element as a 1D array."""
        self.check()
        return np.array([element.constant() for element in self.elements], dtype=float)

    def to_kind(self, kind: Kind) -> "VectorExpression":
        self.check()
        cls = class_for(Container.VECTOR, kind)
        return cls(tuple(promote(element, kind) for element in self.elements))

    def to_monomial_vector(self) -> "MonomialVector":
        return self.to_kind(Kind.MONOMIAL)

    def to_polynomial_vector(self) -> "PolynomialVector":
        return self.to_kind(Kind.POLYNOMIAL)

    def __str__(self):
        return "[" + ", ".join(str(e) for e in self.elements) + "]"

    def __repr__(self):
        return f"{self.__class__.__name__}({self})"


@expression_class(Container.VECTOR, Kind.CONSTANT)
@dataclass(frozen=True)
class ConstantVector(VectorExpression):
    """A vector of real numbers.

    Raw numbers are wrapped as :class:`Constant` on construction, so
    ``ConstantVector([1, 2])`` and ``ConstantVector([Constant(1), Constant(2)])``
    are equal.
    """

    def __post_init__(self):
        elements = tuple(
            Constant(e) if isinstance(e, Real) and not isinstance(e, bool) else e
            for e in self.elements
        )
        object.__setattr__(self, "elements", elements)

    @classmethod
    def from_dense(cls, dense: np.ndarray) -> "ConstantVector":
        """Convert a dense numpy vector into a ConstantVector.

        Column matrices of shape ``(n, 1)`` are accepted and flattened.

        Raises:
            UnsupportedInputError: If the array is not one-dimensional
        """
        arr = np.asarray(dense, dtype=float)
        if arr.ndim == 2 and arr.shape[1] == 1:
            arr = arr[:, 0]
        if arr.ndim != 1:
            raise UnsupportedInputError("ConstantVector.from_dense", dense)
        return cls(tuple(Constant(float(x)) for x in arr))

    def to_dense(self) -> np.ndarray:
        self.check()
        return np.array([element.value for element in self.elements], dtype=float)


@expression_class(Container.VECTOR, Kind.VARIABLE)
@dataclass(frozen=True)
class VariableVector(VectorExpression):
    """A vector of variables."""


@expression_class(Container.VECTOR, Kind.MONOMIAL)
@dataclass(frozen=True)
class MonomialVector(VectorExpression):
    """A vector of monomials."""


@expression_class(Container.VECTOR, Kind.POLYNOMIAL)
@dataclass(frozen=True)
class PolynomialVector(VectorExpression):
    """A vector of polynomials."""


def new_variable_vector(n: int, env: Optional[Environment] = None) -> VariableVector:
    """Allocate ``n`` new variables and return them as a VariableVector."""
    return VariableVector(tuple(new_variable(env) for _ in range(n)))
