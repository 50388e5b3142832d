"""Conversion of raw numeric inputs into constant expressions.

Every public operation passes its operands through :func:`to_expression`, so
Python numbers, numpy scalars/arrays and (nested) lists of numbers can be used
wherever an expression is expected.

Example:
    >>> to_expression(3)
    Const(3.0)
    >>> to_expression(np.eye(2)).dims
    (2, 2)
"""

from numbers import Real
from typing import Any, Sequence

import numpy as np

from symbolicmath.errors import MatrixColumnMismatchError, UnsupportedInputError

from .expr import Constant, ConstantMatrix, ConstantVector, Expression


def _is_number(x: Any) -> bool:
    return isinstance(x, Real) and not isinstance(x, bool)


def to_expression(x: Any, function_name: str = "to_expression") -> Expression:
    """Wrap ``x`` as an expression, leaving existing expressions untouched.

    Args:
        x: An Expression, a real number, a numpy array of up to two dimensions,
            or a flat or nested list of real numbers
        function_name: Name reported in the error for unsupported inputs

    Returns:
        Expression: ``x`` itself, or the equivalent Constant/ConstantVector/ConstantMatrix

    Raises:
        UnsupportedInputError: If ``x`` cannot be represented as an expression
    """
    if isinstance(x, Expression):
        return x
    if _is_number(x):
        return Constant(float(x))
    if isinstance(x, np.ndarray):
        if x.ndim == 0:
            return Constant(float(x))
        if x.ndim == 1:
            return ConstantVector.from_dense(x)
        if x.ndim == 2:
            return ConstantMatrix.from_dense(x)
        raise UnsupportedInputError(function_name, x)
    if isinstance(x, (list, tuple)) and len(x) > 0:
        if all(_is_number(e) for e in x):
            return constant_vector_from(x)
        if all(isinstance(e, (list, tuple, np.ndarray)) for e in x):
            return constant_matrix_from(x)
    raise UnsupportedInputError(function_name, x)


def constant_vector_from(x: Any) -> ConstantVector:
    """Convert ``x`` into a ConstantVector.

    Accepts a ConstantVector, a 1D numpy array (or an ``(n, 1)`` column) and a
    flat sequence of real numbers.
    """
    if isinstance(x, ConstantVector):
        return x
    if isinstance(x, np.ndarray):
        return ConstantVector.from_dense(x)
    if isinstance(x, (list, tuple)) and all(_is_number(e) for e in x):
        return ConstantVector(tuple(Constant(float(e)) for e in x))
    raise UnsupportedInputError("constant_vector_from", x)


def constant_matrix_from(x: Any) -> ConstantMatrix:
    """Convert ``x`` into a ConstantMatrix.

    Accepts a ConstantMatrix, a ConstantVector (as a single column), a 2D
    numpy array and a sequence of equally long rows of real numbers.

    Raises:
        MatrixColumnMismatchError: If the rows of a nested sequence differ in length
        UnsupportedInputError: For any other input
    """
    if isinstance(x, ConstantMatrix):
        return x
    if isinstance(x, ConstantVector):
        return ConstantMatrix(tuple((element,) for element in x.elements))
    if isinstance(x, np.ndarray):
        return ConstantMatrix.from_dense(x)
    if isinstance(x, (list, tuple)) and len(x) > 0:
        rows = [list(row) if isinstance(row, (list, tuple, np.ndarray)) else None for row in x]
        if any(row is None for row in rows):
            raise UnsupportedInputError("constant_matrix_from", x)
        n_cols = len(rows[0])
        for ii, row in enumerate(rows):
            if len(row) != n_cols:
                raise MatrixColumnMismatchError(n_cols, len(row), ii)
            if not all(_is_number(e) for e in row):
                raise UnsupportedInputError("constant_matrix_from", x)
        return ConstantMatrix(tuple(tuple(Constant(float(e)) for e in row) for row in rows))
    raise UnsupportedInputError("constant_matrix_from", x)


def identity(n: int) -> np.ndarray:
    """Dense ``n x n`` identity matrix."""
    return np.eye(n)


def ones(shape: Sequence[int]) -> np.ndarray:
    return np.ones(tuple(shape))


def zeros(shape: Sequence[int]) -> np.ndarray:
    return np.zeros(tuple(shape))
