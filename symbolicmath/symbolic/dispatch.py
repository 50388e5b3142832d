"""Promotion and dispatch engine for binary operations.

Scalar results are produced by two rule tables, ``_PLUS_RULES`` and
``_MULTIPLY_RULES``, keyed by the ``(left_kind, right_kind)`` pair of the
operands. Rules are registered with the :func:`plus_rule` and
:func:`multiply_rule` decorators and both tables are verified to cover all
sixteen kind pairs when this module is imported.

Container operations are built on top of the scalar rules:

- ``plus``/``minus``/``comparison`` work elementwise and broadcast ``(1, 1)``
  operands
- ``multiply`` is a row-by-column product when the operands conform, and
  elementwise scaling when one of them is scalar
- ``transpose`` and ``power`` reuse ``multiply``

Every operation converts raw inputs with :func:`to_expression` and calls
``check()`` on both operands before any work is done. A failing operand check
is re-raised with its ``operand`` attribute set to ``"left"`` or ``"right"``.

Example:
    >>> x = new_variable()
    >>> plus(x, 3.14)
    Polynomial(x_0 + 3.14)
"""

import functools
import itertools
from numbers import Integral
from typing import Any, Callable, Dict, Tuple

import numpy as np

from symbolicmath.errors import (
    NegativeExponentError,
    NonSquareMatrixError,
    SymbolicMathError,
    UnsupportedInputError,
)

from .convert import to_expression
from .expr import (
    Constant,
    ConstantMatrix,
    ConstrSense,
    Constraint,
    Container,
    Expression,
    Kind,
    Polynomial,
    ScalarExpression,
    assemble,
    constraint_class_for,
    container_for_dims,
    monomial_product,
)
from .shape_checker import check_dims_elementwise, check_dims_multiply

C, V, M, P = Kind.CONSTANT, Kind.VARIABLE, Kind.MONOMIAL, Kind.POLYNOMIAL

ScalarRule = Callable[[ScalarExpression, ScalarExpression], ScalarExpression]

_PLUS_RULES: Dict[Tuple[Kind, Kind], ScalarRule] = {}
_MULTIPLY_RULES: Dict[Tuple[Kind, Kind], ScalarRule] = {}


def plus_rule(*pairs: Tuple[Kind, Kind]):
    """Decorator to register a scalar addition rule for one or more kind pairs."""

    def register(fn: ScalarRule):
        for pair in pairs:
            _PLUS_RULES[pair] = fn
        return fn

    return register


def multiply_rule(*pairs: Tuple[Kind, Kind]):
    """Decorator to register a scalar multiplication rule for one or more kind pairs."""

    def register(fn: ScalarRule):
        for pair in pairs:
            _MULTIPLY_RULES[pair] = fn
        return fn

    return register


# =============================================================================
# Scalar rules
# =============================================================================


@plus_rule((C, C))
def _plus_constants(left, right):
    return Constant(left.value + right.value)


@plus_rule((C, V), (C, M), (V, C), (V, V), (V, M), (M, C), (M, V), (M, M))
def _plus_terms(left, right):
    lm, rm = left.to_monomial(), right.to_monomial()
    if lm.matches_form_of(rm):
        return lm.with_coefficient(lm.coefficient + rm.coefficient)
    return Polynomial((lm, rm))


@plus_rule((C, P), (V, P), (M, P), (P, C), (P, V), (P, M), (P, P))
def _plus_polynomials(left, right):
    lm, rm = left.to_polynomial().monomials, right.to_polynomial().monomials
    if len(lm) == 1 and len(rm) == 1 and lm[0].matches_form_of(rm[0]):
        return Polynomial((lm[0].with_coefficient(lm[0].coefficient + rm[0].coefficient),))
    return Polynomial(lm + rm)


@multiply_rule((C, C))
def _multiply_constants(left, right):
    return Constant(left.value * right.value)


@multiply_rule((C, V), (C, M), (V, C), (V, V), (V, M), (M, C), (M, V), (M, M))
def _multiply_terms(left, right):
    return monomial_product(left.to_monomial(), right.to_monomial())


@multiply_rule((C, P), (V, P), (M, P), (P, C), (P, V), (P, M), (P, P))
def _multiply_polynomials(left, right):
    lm, rm = left.to_polynomial().monomials, right.to_polynomial().monomials
    return Polynomial(tuple(monomial_product(a, b) for a in lm for b in rm))


def _verify_rule_tables() -> None:
    expected = set(itertools.product(Kind, Kind))
    for name, table in (("plus", _PLUS_RULES), ("multiply", _MULTIPLY_RULES)):
        missing = expected - set(table)
        if missing:
            pairs = ", ".join(f"({a.name}, {b.name})" for a, b in sorted(missing))
            raise NotImplementedError(f"No {name} rule for kind pairs: {pairs}")


_verify_rule_tables()


def scalar_plus(left: ScalarExpression, right: ScalarExpression) -> ScalarExpression:
    return _PLUS_RULES[(left.kind, right.kind)](left, right)


def scalar_multiply(left: ScalarExpression, right: ScalarExpression) -> ScalarExpression:
    return _MULTIPLY_RULES[(left.kind, right.kind)](left, right)


def _scalar_minus(left: ScalarExpression, right: ScalarExpression) -> ScalarExpression:
    return scalar_plus(left, scalar_multiply(right, Constant(-1.0)))


# =============================================================================
# Operand preparation
# =============================================================================


def _operand(x: Any, side: str, operation: str) -> Expression:
    try:
        expr = to_expression(x, operation)
        expr.check()
    except SymbolicMathError as e:
        e.operand = side
        raise
    return expr


def _prepare(left: Any, right: Any, operation: str) -> Tuple[Expression, Expression]:
    return _operand(left, "left", operation), _operand(right, "right", operation)


def _element(grid, dims: Tuple[int, int], ii: int, jj: int) -> ScalarExpression:
    if dims == (1, 1):
        return grid[0][0]
    return grid[ii][jj]


def _broadcast_dims(left: Expression, right: Expression) -> Tuple[int, int]:
    return right.dims if left.dims == (1, 1) else left.dims


def _elementwise(left: Expression, right: Expression, rule: ScalarRule) -> Expression:
    """Apply a scalar rule to every pair of elements, broadcasting ``(1, 1)`` operands.

    The result container follows the broadcast dims, so a ``(1, 1)`` matrix
    combined with a vector gives a vector.
    """
    ldims, rdims = left.dims, right.dims
    dims = _broadcast_dims(left, right)
    lgrid, rgrid = left.grid(), right.grid()
    rows = []
    for ii in range(dims[0]):
        row = []
        for jj in range(dims[1]):
            row.append(rule(_element(lgrid, ldims, ii, jj), _element(rgrid, rdims, ii, jj)))
        rows.append(tuple(row))
    return assemble(rows, container_for_dims(dims))


def _matrix_product(left: Expression, right: Expression) -> Expression:
    """Row-by-column product with every polynomial entry simplified.

    A ``(1, 1)`` product is returned as a scalar and a single-column product as
    a vector.
    """
    lgrid, rgrid = left.grid(), right.grid()
    n_rows, n_inner = left.dims
    n_cols = right.dims[1]
    rows = []
    for ii in range(n_rows):
        row = []
        for jj in range(n_cols):
            products = [scalar_multiply(lgrid[ii][kk], rgrid[kk][jj]) for kk in range(n_inner)]
            entry = functools.reduce(scalar_plus, products)
            if entry.kind == Kind.POLYNOMIAL:
                entry = entry.simplify()
            row.append(entry)
        rows.append(tuple(row))
    return assemble(rows, container_for_dims((n_rows, n_cols)))


# =============================================================================
# Public operations
# =============================================================================


def plus(left: Any, right: Any) -> Expression:
    """Elementwise sum of two operands."""
    left, right = _prepare(left, right, "plus")
    check_dims_elementwise(left, right, "plus")
    return _elementwise(left, right, scalar_plus)


def minus(left: Any, right: Any) -> Expression:
    """Elementwise difference, computed as ``left + (-1) * right``."""
    left, right = _prepare(left, right, "minus")
    check_dims_elementwise(left, right, "minus")
    return _elementwise(left, right, _scalar_minus)


def multiply(left: Any, right: Any) -> Expression:
    """Product of two operands.

    Conforming containers (``left.cols == right.rows``) are multiplied row by
    column. When either operand is a scalar, or is ``(1, 1)`` and the operands
    do not conform, every element of the other operand is scaled.

    Raises:
        DimensionError: If the operands neither conform nor broadcast
    """
    left, right = _prepare(left, right, "multiply")
    check_dims_multiply(left, right, "multiply")
    if left.container == Container.SCALAR or right.container == Container.SCALAR:
        return _elementwise(left, right, scalar_multiply)
    if left.dims[1] == right.dims[0]:
        return _matrix_product(left, right)
    return _elementwise(left, right, scalar_multiply)


def transpose(expr: Any) -> Expression:
    """Swap rows and columns.

    Expressions of dims ``(1, 1)`` are returned unchanged. A column vector
    becomes a one-row matrix and a one-row matrix becomes a column vector.
    """
    expr = _operand(expr, "left", "transpose")
    if expr.dims == (1, 1):
        return expr
    rows = tuple(zip(*expr.grid()))
    return assemble(rows, container_for_dims((len(rows), len(rows[0]))))


def power(expr: Any, exponent: int) -> Expression:
    """Raise a scalar or square matrix to a non-negative integer power.

    The result is built by repeated :func:`multiply`, starting from the
    constant 1 for scalars and from the identity for matrices. Any ``(1, 1)``
    operand, including a one-element matrix, is raised as a scalar. Scalar
    powers are not simplified.

    Raises:
        NegativeExponentError: If ``exponent`` is negative
        NonSquareMatrixError: If a matrix operand is not square
        UnsupportedInputError: For non-integer exponents and vector operands
    """
    expr = _operand(expr, "left", "power")
    if isinstance(exponent, bool) or not isinstance(exponent, Integral):
        raise UnsupportedInputError("power", exponent)
    if exponent < 0:
        raise NegativeExponentError(int(exponent))

    if expr.dims == (1, 1):
        result = Constant(1.0)
    elif expr.container == Container.MATRIX:
        n_rows, n_cols = expr.dims
        if n_rows != n_cols:
            raise NonSquareMatrixError(expr.dims)
        result = ConstantMatrix.from_dense(np.eye(n_rows))
    else:
        raise UnsupportedInputError("power", expr)

    for _ in range(int(exponent)):
        result = multiply(result, expr)
    return result


def comparison(left: Any, right: Any, sense: ConstrSense) -> Constraint:
    """Build a constraint ``left <sense> right`` without touching either side.

    The constraint class follows the broadcast dims of the two operands.
    """
    if not isinstance(sense, ConstrSense):
        raise UnsupportedInputError("comparison", sense)
    left, right = _prepare(left, right, "comparison")
    check_dims_elementwise(left, right, "comparison")
    cls = constraint_class_for(container_for_dims(_broadcast_dims(left, right)))
    return cls(left, right, sense)
