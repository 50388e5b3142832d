"""Tests for linear coefficients, linear representations and implication.

Tests cover:
- is_linear on expressions and constraints
- linear_coeff shapes, orderings and error cases
- as_simplified_constraint
- Inequality/equality representations, ``>=`` negation and ordering warnings
- implies on single-variable scalar constraints
"""

import numpy as np
import pytest

from symbolicmath.errors import (
    CanNotGetLinearCoeffOfConstantError,
    EmptyLinearCoeffsError,
    EqualityConstraintRequiredError,
    InequalityConstraintRequiredError,
    LinearExpressionRequiredError,
    UnallocatedVariableError,
    UnsupportedInputError,
)
from symbolicmath.symbolic import (
    as_simplified_constraint,
    implies,
    is_linear,
    linear_coeff,
    linear_equality_representation,
    linear_inequality_representation,
)
from symbolicmath.symbolic.expr import (
    Constant,
    ConstantMatrix,
    ConstantVector,
    ConstrSense,
    Monomial,
    Polynomial,
    ScalarConstraint,
    Variable,
    VectorConstraint,
    new_variable,
    new_variable_vector,
)

# =============================================================================
# is_linear / linear_coeff
# =============================================================================


def test_is_linear():
    x, y = new_variable(), new_variable()
    assert is_linear(x + 1.0)
    assert is_linear(Constant(3.0))
    assert is_linear(ConstantVector([1.0, 2.0]))
    assert not is_linear(x * y)
    assert not is_linear(x**2 + x)
    assert is_linear(x.less_eq(y))
    assert not is_linear(x.less_eq(y * y))
    assert (2 * x).is_linear()


def test_linear_coeff_scalar():
    x, y = new_variable(), new_variable()
    expr = 2 * x + 3 * y + 1.0
    np.testing.assert_array_equal(linear_coeff(expr), [2.0, 3.0])
    np.testing.assert_array_equal(linear_coeff(expr, [y, x]), [3.0, 2.0])
    assert linear_coeff(expr).shape == (2,)


def test_linear_coeff_sums_repeated_terms():
    x = new_variable()
    np.testing.assert_array_equal((x + x + 4.0).linear_coeff(), [2.0])


def test_linear_coeff_vector():
    x = new_variable_vector(2)
    A = np.array([[1.0, 2.0], [3.0, 4.0]])
    coeffs = linear_coeff(ConstantMatrix.from_dense(A) @ x)
    assert coeffs.shape == (2, 2)
    np.testing.assert_array_equal(coeffs, A)


def test_linear_coeff_ignores_variables_outside_order():
    x, y = new_variable(), new_variable()
    np.testing.assert_array_equal(linear_coeff(x + y, [y]), [1.0])


def test_linear_coeff_of_constant():
    with pytest.raises(CanNotGetLinearCoeffOfConstantError) as excinfo:
        linear_coeff(Constant(1.0))
    assert excinfo.value.expression == Constant(1.0)


def test_linear_coeff_empty_order():
    with pytest.raises(EmptyLinearCoeffsError):
        linear_coeff(new_variable(), [])


def test_linear_coeff_of_nonlinear():
    x = new_variable()
    with pytest.raises(LinearExpressionRequiredError):
        linear_coeff(x * x)


# =============================================================================
# as_simplified_constraint
# =============================================================================


def test_as_simplified_constraint_moves_terms_left():
    x = new_variable()
    c = (2 * x + 3.0).less_eq(x + 5.0)
    simplified = as_simplified_constraint(c)
    assert isinstance(simplified, ScalarConstraint)
    assert simplified.left == Polynomial((Monomial(1.0, (x,), (1,)),))
    assert simplified.right == Constant(2.0)
    assert simplified.sense == c.sense


def test_as_simplified_constraint_with_cancelling_variables():
    x = new_variable()
    simplified = (x + 1.0).eq(x).as_simplified_constraint()
    assert simplified.left == Polynomial((Monomial(0.0),))
    assert simplified.right == Constant(-1.0)


def test_as_simplified_vector_constraint():
    x = new_variable_vector(2)
    simplified = as_simplified_constraint((x + 1.0).less_eq([3.0, 4.0]))
    assert isinstance(simplified, VectorConstraint)
    np.testing.assert_array_equal(simplified.right.to_dense(), [2.0, 3.0])


# =============================================================================
# Linear representations
# =============================================================================


def test_scalar_inequality_representation():
    x, y = new_variable(), new_variable()
    A, b = linear_inequality_representation((x + 2 * y).less_eq(4.0))
    np.testing.assert_array_equal(A, [1.0, 2.0])
    assert b == 4.0
    assert isinstance(b, float)


def test_variables_on_both_sides():
    x, y = new_variable(), new_variable()
    A, b = (3 * x + 1.0).less_eq(y).linear_inequality_representation()
    np.testing.assert_array_equal(A, [3.0, -1.0])
    assert b == -1.0


def test_greater_eq_is_negated():
    x = new_variable()
    A, b = x.greater_eq(1.0).linear_inequality_representation()
    np.testing.assert_array_equal(A, [-1.0])
    assert b == -1.0


def test_vector_inequality_representation():
    x = new_variable_vector(2)
    M = np.array([[1.0, 2.0], [3.0, 4.0]])
    c = (ConstantMatrix.from_dense(M) @ x).less_eq([5.0, 6.0])
    A, b = linear_inequality_representation(c, list(x.elements))
    assert A.shape == (2, 2)
    assert b.shape == (2,)
    np.testing.assert_array_equal(A, M)
    np.testing.assert_array_equal(b, [5.0, 6.0])


def test_equality_representation():
    x, y = new_variable(), new_variable()
    A, b = linear_equality_representation((x - y).eq(0.5))
    np.testing.assert_array_equal(A, [1.0, -1.0])
    assert b == 0.5


def test_extra_ordering_variables_get_zero_columns():
    x, y, z = new_variable(), new_variable(), new_variable()
    A, _ = linear_inequality_representation((x + y).less_eq(1.0), [x, z, y])
    np.testing.assert_array_equal(A, [1.0, 0.0, 1.0])


def test_missing_ordering_variables_warn():
    x, y = new_variable(), new_variable()
    with pytest.warns(UserWarning, match="not in the given variable ordering"):
        A, b = linear_inequality_representation((x + y).less_eq(1.0), [x])
    np.testing.assert_array_equal(A, [1.0])
    assert b == 1.0


def test_representation_sense_errors():
    x = new_variable()
    with pytest.raises(InequalityConstraintRequiredError):
        linear_inequality_representation(x.eq(1.0))
    with pytest.raises(EqualityConstraintRequiredError):
        linear_equality_representation(x.less_eq(1.0))


def test_invalid_side_is_reported_before_sense():
    eq = ScalarConstraint(Variable(), Constant(1.0), ConstrSense.EQUAL)
    with pytest.raises(UnallocatedVariableError):
        linear_inequality_representation(eq)
    le = ScalarConstraint(Variable(), Constant(1.0), ConstrSense.LESS_THAN_EQUAL)
    with pytest.raises(UnallocatedVariableError):
        linear_equality_representation(le)


def test_zero_exponent_factor_is_a_constant_term():
    x = new_variable()
    c = Monomial(3.0, (x,), (0,)).less_eq(0.0)
    A, b = linear_inequality_representation(c, [x])
    np.testing.assert_array_equal(A, [0.0])
    assert b == -3.0


@pytest.mark.parametrize("side", ["left", "right"])
def test_nonlinear_side_is_reported(side):
    x = new_variable()
    c = (x * x).less_eq(1.0) if side == "left" else x.less_eq(x * x)
    with pytest.raises(LinearExpressionRequiredError) as excinfo:
        linear_inequality_representation(c)
    assert excinfo.value.operand == side
    assert excinfo.value.operation == "linear_inequality_representation"


@pytest.mark.parametrize("point", [[0.0, 0.0], [1.0, 1.0], [3.0, -2.0], [-1.0, 4.0]])
def test_representation_agrees_with_constraint(point):
    x, y = new_variable(), new_variable()
    c = (2 * x - y + 1.0).greater_eq(x + 0.5 * y)
    A, b = c.linear_inequality_representation([x, y])
    vx, vy = point
    holds = 2 * vx - vy + 1.0 >= vx + 0.5 * vy
    assert (A @ np.array(point) <= b) == holds


# =============================================================================
# implies
# =============================================================================


def test_implies_normalizes_negative_coefficients():
    x = new_variable()
    sc1 = x.multiply(-2).less_eq(4.0)
    sc2 = x.multiply(-2).less_eq(5.0)
    assert implies(sc1, sc2)
    assert not implies(sc2, sc1)


def test_implies_compares_normalized_bounds():
    x = new_variable()
    sc1 = x.multiply(2).less_eq(1.0)
    sc2 = x.multiply(10).less_eq(2.0)
    assert not implies(sc1, sc2)
    assert sc2.implies(sc1)


def test_implies_mixed_senses():
    x = new_variable()
    assert not implies(x.less_eq(1.0), x.greater_eq(0.0))
    assert implies(x.greater_eq(2.0), (-x).less_eq(-1.0))


def test_equality_implies():
    x = new_variable()
    eq = (2 * x).eq(2.0)
    assert implies(eq, x.less_eq(1.0))
    assert implies(eq, x.greater_eq(0.5))
    assert not implies(eq, x.greater_eq(3.0))
    assert implies(eq, x.eq(1.0))
    assert not implies(eq, x.eq(2.0))
    assert not implies(x.less_eq(1.0), x.eq(1.0))


def test_implies_different_variables():
    x, y = new_variable(), new_variable()
    assert not implies(x.less_eq(1.0), y.less_eq(2.0))
    assert not implies((x + y).less_eq(1.0), x.less_eq(2.0))


def test_implies_requires_scalar_constraints():
    x = new_variable_vector(2)
    with pytest.raises(UnsupportedInputError):
        implies(x.less_eq(1.0), x.at_vec(0).less_eq(1.0))
