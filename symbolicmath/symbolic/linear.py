"""Linear structure of expressions and constraints.

This module extracts the linear representation ``A x <sense> b`` of a linear
constraint, where ``x`` is an ordering of its variables, and decides
implication between single-variable scalar constraints.

Representations are normalized to ``<=`` for inequalities: a ``>=``
constraint has both ``A`` and ``b`` negated.

Example:
    >>> x, y = new_variable(), new_variable()
    >>> c = (x + 2 * y).less_eq(4.0)
    >>> A, b = linear_inequality_representation(c)
    >>> A, b
    (array([1., 2.]), 4.0)
"""

import warnings
from typing import List, Optional, Sequence, Tuple

import numpy as np

from symbolicmath.errors import (
    CanNotGetLinearCoeffOfConstantError,
    EmptyLinearCoeffsError,
    EqualityConstraintRequiredError,
    InequalityConstraintRequiredError,
    LinearExpressionRequiredError,
    UnsupportedInputError,
)

from .dispatch import minus
from .expr import (
    Constant,
    ConstrSense,
    Constraint,
    Container,
    Expression,
    Monomial,
    Polynomial,
    ScalarConstraint,
    ScalarExpression,
    Variable,
    assemble,
    constraint_class_for,
)


def _monomials(element: ScalarExpression) -> Tuple[Monomial, ...]:
    return element.to_polynomial().monomials


def _elements(expr: Expression) -> List[ScalarExpression]:
    """Scalar elements of ``expr`` in row-major order."""
    return [element for row in expr.grid() for element in row]


def is_linear(expr) -> bool:
    """True if every monomial of every element has total degree at most 1.

    Constraints are linear when both sides are.
    """
    if isinstance(expr, Constraint):
        return is_linear(expr.left) and is_linear(expr.right)
    expr.check()
    return all(m.degree() <= 1 for element in _elements(expr) for m in _monomials(element))


def _coefficient_row(element: ScalarExpression, index: dict, n: int) -> np.ndarray:
    row = np.zeros(n)
    for monomial in _monomials(element):
        if monomial.degree() != 1:
            continue
        for v, e in zip(monomial.variable_factors, monomial.exponents):
            if e == 1 and v.id in index:
                row[index[v.id]] += monomial.coefficient
    return row


def _resolve_order(expr, var_order: Optional[Sequence[Variable]]) -> List[Variable]:
    if var_order is None:
        var_order = expr.variables()
        if len(var_order) == 0:
            raise CanNotGetLinearCoeffOfConstantError(expr)
        return list(var_order)
    var_order = list(var_order)
    if len(var_order) == 0:
        raise EmptyLinearCoeffsError(expr)
    return var_order


def linear_coeff(expr: Expression, var_order: Optional[Sequence[Variable]] = None) -> np.ndarray:
    """Coefficients of the linear part of ``expr``.

    Args:
        expr: A linear scalar, vector or matrix expression
        var_order: Variables giving the column order. Defaults to
            ``expr.variables()``; variables of ``expr`` missing from the
            ordering are ignored.

    Returns:
        np.ndarray: Shape ``(n,)`` for scalar expressions, ``(m, n)`` otherwise,
        with ``m`` the number of elements in row-major order

    Raises:
        CanNotGetLinearCoeffOfConstantError: If ``expr`` has no variables and no
            ordering was given
        EmptyLinearCoeffsError: If the given ordering is empty
        LinearExpressionRequiredError: If ``expr`` is not linear
    """
    expr.check()
    var_order = _resolve_order(expr, var_order)
    if not is_linear(expr):
        raise LinearExpressionRequiredError("linear_coeff", expr)

    index = {v.id: ii for ii, v in enumerate(var_order)}
    coeffs = np.array([_coefficient_row(e, index, len(var_order)) for e in _elements(expr)])
    if expr.container == Container.SCALAR:
        return coeffs[0]
    return coeffs


def as_simplified_constraint(constraint: Constraint) -> Constraint:
    """Rewrite a constraint as ``non-constant terms <sense> constant``.

    Every element of ``left - right`` is simplified; its variable terms form
    the new left side and the negated constant term forms the new right side.
    A side with no variable terms left becomes the zero polynomial.
    """
    constraint.check()
    diff = minus(constraint.left, constraint.right)
    left_rows, right_rows = [], []
    for row in diff.grid():
        left_row, right_row = [], []
        for element in row:
            simplified = element.to_polynomial().simplify()
            terms = tuple(m for m in simplified.monomials if not m.is_constant())
            left_row.append(Polynomial(terms if terms else (Monomial(0.0),)))
            right_row.append(Constant(-simplified.constant()))
        left_rows.append(tuple(left_row))
        right_rows.append(tuple(right_row))

    cls = constraint_class_for(diff.container)
    left = assemble(left_rows, diff.container)
    right = assemble(right_rows, diff.container)
    return cls(left, right, constraint.sense)


def _linear_representation(constraint: Constraint, var_order, operation: str):
    for side_name, side in (("left", constraint.left), ("right", constraint.right)):
        if not is_linear(side):
            error = LinearExpressionRequiredError(operation, side)
            error.operand = side_name
            raise error

    var_order = _resolve_order(constraint, var_order)
    order_ids = {v.id for v in var_order}
    dropped = [v for v in constraint.variables() if v.id not in order_ids]
    if dropped:
        warnings.warn(
            f"{operation}: variables {', '.join(str(v) for v in dropped)} of the constraint "
            "are not in the given variable ordering and are ignored",
            UserWarning,
            stacklevel=3,
        )

    index = {v.id: ii for ii, v in enumerate(var_order)}
    elements = _elements(minus(constraint.left, constraint.right))
    A = np.array([_coefficient_row(e, index, len(var_order)) for e in elements])
    b = np.array([-e.constant() for e in elements], dtype=float)

    if constraint.sense == ConstrSense.GREATER_THAN_EQUAL:
        A, b = -A, -b

    if constraint.container == Container.SCALAR:
        return A[0], float(b[0])
    return A, b


def linear_inequality_representation(
    constraint: Constraint, var_order: Optional[Sequence[Variable]] = None
) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(A, b)`` such that the constraint holds iff ``A x <= b``.

    Args:
        constraint: A linear ``<=`` or ``>=`` constraint
        var_order: Column order of ``A``. Defaults to the variables of the left
            side followed by new variables of the right side. Ordering
            variables absent from the constraint get coefficient 0.

    Returns:
        tuple: ``A`` of shape ``(n,)`` and a float ``b`` for scalar constraints;
        ``A`` of shape ``(m, n)`` and ``b`` of shape ``(m,)`` otherwise

    Raises:
        InequalityConstraintRequiredError: If the sense is ``=``
        LinearExpressionRequiredError: If either side is not linear
    """
    constraint.check()
    if constraint.sense == ConstrSense.EQUAL:
        raise InequalityConstraintRequiredError("linear_inequality_representation")
    return _linear_representation(constraint, var_order, "linear_inequality_representation")


def linear_equality_representation(
    constraint: Constraint, var_order: Optional[Sequence[Variable]] = None
) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(A, b)`` such that the constraint holds iff ``A x == b``.

    Shapes and variable ordering follow :func:`linear_inequality_representation`.

    Raises:
        EqualityConstraintRequiredError: If the sense is not ``=``
        LinearExpressionRequiredError: If either side is not linear
    """
    constraint.check()
    if constraint.sense != ConstrSense.EQUAL:
        raise EqualityConstraintRequiredError("linear_equality_representation")
    return _linear_representation(constraint, var_order, "linear_equality_representation")


def _normalized_bound(constraint: ScalarConstraint):
    """Write a single-variable constraint as ``x <sense> bound``.

    Returns ``(variable, sense, bound)``, or None when the constraint is not
    linear in exactly one variable.
    """
    if not is_linear(constraint):
        return None
    variables = constraint.variables()
    if len(variables) != 1:
        return None
    v = variables[0]
    coeff, rhs = _single_coefficient(constraint, v)
    if coeff == 0.0:
        return None
    sense = constraint.sense.reverse() if coeff < 0 else constraint.sense
    return v, sense, rhs / coeff


def _single_coefficient(constraint: ScalarConstraint, v: Variable) -> Tuple[float, float]:
    (element,) = _elements(minus(constraint.left, constraint.right))
    coeff = float(_coefficient_row(element, {v.id: 0}, 1)[0])
    return coeff, -element.constant()


def implies(first: Constraint, second: Constraint) -> bool:
    """True if every ``x`` satisfying ``first`` also satisfies ``second``.

    Only single-variable scalar constraints on the same variable are compared.
    Both are normalized to ``x <sense> bound`` by dividing through by the
    coefficient of ``x`` (reversing the sense when it is negative), and the
    bounds are compared:

    - ``<=`` implies ``<=`` when its bound is not larger
    - ``>=`` implies ``>=`` when its bound is not smaller
    - ``=`` implies an inequality its value satisfies, and only the identical ``=``

    Any other pair returns False.

    Raises:
        UnsupportedInputError: If either constraint is not a ScalarConstraint
    """
    for constraint in (first, second):
        if not isinstance(constraint, ScalarConstraint):
            raise UnsupportedInputError("implies", constraint)
    first.check()
    second.check()

    lhs = _normalized_bound(first)
    rhs = _normalized_bound(second)
    if lhs is None or rhs is None:
        return False
    v1, sense1, bound1 = lhs
    v2, sense2, bound2 = rhs
    if v1 != v2:
        return False

    LE, GE, EQ = ConstrSense.LESS_THAN_EQUAL, ConstrSense.GREATER_THAN_EQUAL, ConstrSense.EQUAL
    if sense2 == LE and sense1 in (LE, EQ):
        return bound1 <= bound2
    if sense2 == GE and sense1 in (GE, EQ):
        return bound1 >= bound2
    if sense1 == EQ and sense2 == EQ:
        return bound1 == bound2
    return False
