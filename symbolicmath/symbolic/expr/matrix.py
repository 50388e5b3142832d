"""Matrix expressions.

Each scalar kind has a matrix form holding a non-empty tuple of equally long
rows. A row whose length differs from the first row makes the matrix invalid;
:meth:`MatrixExpression.check` reports the index of the first such row.
"""

from dataclasses import dataclass
from numbers import Real
from typing import Optional, Tuple

import numpy as np

from symbolicmath.errors import (
    EmptyMatrixError,
    InvalidMatrixIndexError,
    MatrixColumnMismatchError,
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
class MatrixExpression(Expression):
    """Base class of the four matrix kinds.

    Attributes:
        rows: Tuple of rows, each a tuple of scalar elements
    """

    rows: Tuple[Tuple[ScalarExpression, ...], ...]

    def __post_init__(self):
        object.__setattr__(self, "rows", tuple(tuple(row) for row in self.rows))

    @property
    def dims(self) -> Tuple[int, int]:
        if len(self.rows) == 0:
            return (0, 0)
        return (len(self.rows), len(self.rows[0]))

    def check(self) -> None:
        if len(self.rows) == 0 or len(self.rows[0]) == 0:
            raise EmptyMatrixError(self)
        n_cols = len(self.rows[0])
        for ii, row in enumerate(self.rows):
            if len(row) != n_cols:
                raise MatrixColumnMismatchError(n_cols, len(row), ii)
        element_cls = class_for(Container.SCALAR, self.kind)
        for row in self.rows:
            for element in row:
                if not isinstance(element, element_cls):
                    raise UnsupportedInputError(f"{self.__class__.__name__}.check", element)
                element.check()

    def grid(self):
        return self.rows

    def at(self, ii: int, jj: int) -> ScalarExpression:
        """Element in row ``ii`` and column ``jj``.

        Raises:
            InvalidMatrixIndexError: If either index is out of bounds
        """
        self.check()
        n_rows, n_cols = self.dims
        if ii < 0 or ii >= n_rows or jj < 0 or jj >= n_cols:
            raise InvalidMatrixIndexError(ii, jj, self)
        return self.rows[ii][jj]

    def constant(self) -> np.ndarray:
        """Constant part of every element as a 2D array."""
        self.check()
        return np.array([[element.constant() for element in row] for row in self.rows], dtype=float)

    def to_kind(self, kind: Kind) -> "MatrixExpression":
        self.check()
        cls = class_for(Container.MATRIX, kind)
        return cls(tuple(tuple(promote(element, kind) for element in row) for row in self.rows))

    def to_monomial_matrix(self) -> "MonomialMatrix":
        return self.to_kind(Kind.MONOMIAL)

    def to_polynomial_matrix(self) -> "PolynomialMatrix":
        return self.to_kind(Kind.POLYNOMIAL)

    def is_square(self) -> bool:
        n_rows, n_cols = self.dims
        return n_rows == n_cols

    def __str__(self):
        return "[" + "; ".join(", ".join(str(e) for e in row) for row in self.rows) + "]"

    def __repr__(self):
        return f"{self.__class__.__name__}({self})"


@expression_class(Container.MATRIX, Kind.CONSTANT)
@dataclass(frozen=True)
class ConstantMatrix(MatrixExpression):
    """A matrix of real numbers.

    Example:
        >>> A = ConstantMatrix.from_dense(np.eye(2))
        >>> A.dims
        (2, 2)
    """

    def __post_init__(self):
        rows = tuple(
            tuple(
                Constant(e) if isinstance(e, Real) and not isinstance(e, bool) else e
                for e in row
            )
            for row in self.rows
        )
        object.__setattr__(self, "rows", rows)

    @classmethod
    def from_dense(cls, dense: np.ndarray) -> "ConstantMatrix":
        """Convert a dense 2D numpy array into a ConstantMatrix.

        Raises:
            UnsupportedInputError: If the array is not two-dimensional
        """
        arr = np.asarray(dense, dtype=float)
        if arr.ndim != 2:
            raise UnsupportedInputError("ConstantMatrix.from_dense", dense)
        return cls(tuple(tuple(Constant(float(x)) for x in row) for row in arr))

    def to_dense(self) -> np.ndarray:
        self.check()
        return np.array([[element.value for element in row] for row in self.rows], dtype=float)


@expression_class(Container.MATRIX, Kind.VARIABLE)
@dataclass(frozen=True)
class VariableMatrix(MatrixExpression):
    """A matrix of variables."""


@expression_class(Container.MATRIX, Kind.MONOMIAL)
@dataclass(frozen=True)
class MonomialMatrix(MatrixExpression):
    """A matrix of monomials."""


@expression_class(Container.MATRIX, Kind.POLYNOMIAL)
@dataclass(frozen=True)
class PolynomialMatrix(MatrixExpression):
    """A matrix of polynomials."""


def new_variable_matrix(
    n_rows: int, n_cols: int, env: Optional[Environment] = None
) -> VariableMatrix:
    """Allocate ``n_rows * n_cols`` new variables, row by row, as a VariableMatrix."""
    rows = tuple(tuple(new_variable(env) for _ in range(n_cols)) for _ in range(n_rows))
    return VariableMatrix(rows)
