"""Horizontal and vertical stacking of expressions.

Example:
    >>> x = new_variable_vector(2)
    >>> hstack(x, [1.0, 2.0]).dims
    (2, 2)
    >>> vstack(x, 3.0).dims
    (3, 1)
"""

from typing import Any, List

from symbolicmath.errors import SymbolicMathError, UnsupportedInputError

from .convert import to_expression
from .expr import Expression, assemble, container_for_dims
from .shape_checker import check_dims_hstack, check_dims_vstack


def _prepare_all(exprs, operation: str) -> List[Expression]:
    if len(exprs) == 0:
        raise UnsupportedInputError(operation, exprs)
    prepared = []
    for ii, x in enumerate(exprs):
        try:
            expr = to_expression(x, operation)
            expr.check()
        except SymbolicMathError as e:
            e.operand = f"argument {ii}"
            raise
        prepared.append(expr)
    return prepared


def hstack(*exprs: Any) -> Expression:
    """Place expressions side by side.

    Raises:
        MatrixDimensionError: If the expressions differ in number of rows
    """
    exprs = _prepare_all(exprs, "hstack")
    for expr in exprs[1:]:
        check_dims_hstack(exprs[0], expr, "hstack")
    n_rows = exprs[0].dims[0]
    grids = [expr.grid() for expr in exprs]
    rows = [tuple(element for grid in grids for element in grid[ii]) for ii in range(n_rows)]
    return assemble(rows, container_for_dims((n_rows, len(rows[0]))))


def vstack(*exprs: Any) -> Expression:
    """Place expressions on top of each other.

    Raises:
        MatrixDimensionError: If the expressions differ in number of columns
    """
    exprs = _prepare_all(exprs, "vstack")
    for expr in exprs[1:]:
        check_dims_vstack(exprs[0], expr, "vstack")
    rows = [row for expr in exprs for row in expr.grid()]
    return assemble(rows, container_for_dims((len(rows), exprs[0].dims[1])))
