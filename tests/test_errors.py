"""Tests for the error taxonomy.

Errors must keep their structured fields and derive from both
SymbolicMathError and the matching builtin exception.
"""

import pytest

from symbolicmath.errors import (
    CanNotGetLinearCoeffOfConstantError,
    DimensionError,
    EmptyLinearCoeffsError,
    EqualityConstraintRequiredError,
    InequalityConstraintRequiredError,
    InvalidVectorIndexError,
    LinearExpressionRequiredError,
    MatrixDimensionError,
    NegativeExponentError,
    NonSquareMatrixError,
    SymbolicMathError,
    UnsupportedInputError,
    VectorDimensionError,
)
from symbolicmath.symbolic.expr import Constant, ConstantVector


@pytest.mark.parametrize(
    "error, builtin",
    [
        (DimensionError((1, 2), (3, 4), "plus"), ValueError),
        (VectorDimensionError((2, 1), (3, 1), "plus"), ValueError),
        (MatrixDimensionError((2, 2), (3, 3), "plus"), ValueError),
        (InvalidVectorIndexError(3, ConstantVector([1.0])), IndexError),
        (UnsupportedInputError("plus", "a string"), TypeError),
        (NegativeExponentError(-2), ValueError),
        (NonSquareMatrixError((2, 3)), ValueError),
        (EqualityConstraintRequiredError("op"), ValueError),
        (InequalityConstraintRequiredError("op"), ValueError),
    ],
)
def test_errors_derive_from_base_and_builtin(error, builtin):
    assert isinstance(error, SymbolicMathError)
    assert isinstance(error, builtin)
    assert error.operand is None


def test_dimension_error_message_and_fields():
    err = MatrixDimensionError((3, 3), (4, 4), "plus")
    assert err.left_dims == (3, 3)
    assert err.right_dims == (4, 4)
    assert err.operation == "plus"
    assert str(err) == (
        "matrix dimension error: Cannot perform plus between expression of dimension (3,3) "
        "and expression of dimension (4,4)"
    )


def test_vector_dimension_error_is_a_dimension_error():
    err = VectorDimensionError((2, 1), (3, 1), "minus")
    assert isinstance(err, DimensionError)
    assert str(err).startswith("vector dimension error: Cannot perform minus")


def test_unsupported_input_error_names_function_and_type():
    err = UnsupportedInputError("to_expression", {"a": 1})
    assert err.function_name == "to_expression"
    assert err.input == {"a": 1}
    assert "to_expression" in str(err)
    assert "dict" in str(err)


def test_negative_exponent_message():
    assert "negative exponent (-1)" in str(NegativeExponentError(-1))


def test_linear_errors_keep_expression():
    c = Constant(1.0)
    for cls in (CanNotGetLinearCoeffOfConstantError, EmptyLinearCoeffsError):
        err = cls(c)
        assert err.expression is c
    err = LinearExpressionRequiredError("linear_coeff", c)
    assert err.operation == "linear_coeff"
    assert "Linear expression required" in str(err)


def test_constraint_sense_errors():
    assert str(EqualityConstraintRequiredError("f")) == (
        "Equality constraint required for operation: f"
    )
    assert str(InequalityConstraintRequiredError("f")) == (
        "Inequality constraint required for operation: f"
    )
