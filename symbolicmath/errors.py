"""Error taxonomy for the symbolic core.

Every failure raised by symbolicmath is a subclass of :class:`SymbolicMathError`
and of the builtin exception that best describes it (``ValueError``,
``TypeError`` or ``IndexError``), so callers can catch either. Errors keep
their structured fields (operand dims, indices, operation names) so that
layers built on top of the core can format their own messages.

Example:
    Inspecting a dimension error::

        try:
            A.plus(B)
        except MatrixDimensionError as e:
            print(e.operation, e.left_dims, e.right_dims)
"""

from typing import Any, Optional, Tuple


def _dims_str(dims: Tuple[int, ...]) -> str:
    return "(" + ",".join(str(d) for d in dims) + ")"


def _type_name(obj: Any) -> str:
    return type(obj).__name__


class SymbolicMathError(Exception):
    """Base class for all symbolicmath errors.

    Attributes:
        operand: Which operand of a binary operation failed its validity
            check (``"left"`` or ``"right"``), or None when the error is not
            tied to an operand.
    """

    operand: Optional[str] = None


# =============================================================================
# Validity errors
# =============================================================================


class ValidityError(SymbolicMathError, ValueError):
    """Raised by ``check()`` when an entity breaks a structural invariant."""


class UnallocatedVariableError(ValidityError):
    def __init__(self, variable: Any):
        self.variable = variable
        super().__init__(
            "variable is not well-defined: it was not created by a variable allocator "
            "(use new_variable() or Environment.new_variable())"
        )


class VariableBoundsError(ValidityError):
    def __init__(self, lower: float, upper: float):
        self.lower = lower
        self.upper = upper
        super().__init__(
            f"lower bound ({lower}) of variable must be less than upper bound ({upper})"
        )


class MonomialDegreeMismatchError(ValidityError):
    """The exponent and variable-factor sequences of a monomial differ in length."""

    def __init__(self, n_degrees: int, n_variables: int):
        self.n_degrees = n_degrees
        self.n_variables = n_variables
        super().__init__(
            f"the number of degrees ({n_degrees}) does not match "
            f"the number of variables ({n_variables})"
        )


class EmptyPolynomialError(ValidityError):
    def __init__(self):
        super().__init__("polynomial has no monomials")


class EmptyVectorError(ValidityError):
    def __init__(self, expression: Any):
        self.expression_type = _type_name(expression)
        super().__init__(f"empty vector error: the vector of type {self.expression_type} is empty")


class EmptyMatrixError(ValidityError):
    def __init__(self, expression: Any):
        self.expression_type = _type_name(expression)
        super().__init__(f"empty matrix error: the matrix of type {self.expression_type} is empty")


class MatrixColumnMismatchError(ValidityError):
    """A matrix row has a different length than the first row."""

    def __init__(self, expected_n_columns: int, actual_n_columns: int, row: int):
        self.expected_n_columns = expected_n_columns
        self.actual_n_columns = actual_n_columns
        self.row = row
        super().__init__(
            f"matrix column mismatch error: expected {expected_n_columns} columns, "
            f"received {actual_n_columns} in row {row}"
        )


# =============================================================================
# Dimension errors
# =============================================================================


class DimensionError(SymbolicMathError, ValueError):
    """Two operands have dims that are incompatible for an operation.

    Attributes:
        left_dims: Dims of the left operand as ``(rows, cols)``
        right_dims: Dims of the right operand as ``(rows, cols)``
        operation: Name of the operation (e.g. ``"plus"``, ``"multiply"``)
    """

    prefix = "dimension error"

    def __init__(self, left_dims: Tuple[int, ...], right_dims: Tuple[int, ...], operation: str):
        self.left_dims = tuple(left_dims)
        self.right_dims = tuple(right_dims)
        self.operation = operation
        super().__init__(
            f"{self.prefix}: Cannot perform {operation} between expression of dimension "
            f"{_dims_str(self.left_dims)} and expression of dimension {_dims_str(self.right_dims)}"
        )


class VectorDimensionError(DimensionError):
    """Both operands are vectors and their lengths are incompatible."""

    prefix = "vector dimension error"


class MatrixDimensionError(DimensionError):
    """At least one operand is a matrix and the dims are incompatible."""

    prefix = "matrix dimension error"


class NonSquareMatrixError(SymbolicMathError, ValueError):
    def __init__(self, dims: Tuple[int, ...]):
        self.dims = tuple(dims)
        super().__init__(
            f"matrix of dimension {_dims_str(self.dims)} is not square; cannot raise to power"
        )


# =============================================================================
# Index errors
# =============================================================================


class InvalidVectorIndexError(SymbolicMathError, IndexError):
    def __init__(self, index: int, expression: Any):
        self.index = index
        self.dims = tuple(expression.dims)
        self.expression_type = _type_name(expression)
        super().__init__(
            f"out of bounds error: index {index} is out of bounds for "
            f"{self.expression_type} object of dimension {_dims_str(self.dims)}"
        )


class InvalidMatrixIndexError(SymbolicMathError, IndexError):
    def __init__(self, row_index: int, col_index: int, expression: Any):
        self.row_index = row_index
        self.col_index = col_index
        self.dims = tuple(expression.dims)
        self.expression_type = _type_name(expression)
        super().__init__(
            f"out of bounds error: index ({row_index}, {col_index}) is out of bounds for "
            f"{self.expression_type} object of dimension {_dims_str(self.dims)}"
        )


# =============================================================================
# Input errors
# =============================================================================


class UnsupportedInputError(SymbolicMathError, TypeError):
    """A polymorphic operation received an operand kind it does not handle."""

    def __init__(self, function_name: str, input: Any):
        self.function_name = function_name
        self.input = input
        self.input_type = _type_name(input)
        super().__init__(
            f"unsupported input error: {function_name} "
            f"does not support input of type {self.input_type}"
        )


class NegativeExponentError(SymbolicMathError, ValueError):
    def __init__(self, exponent: int):
        self.exponent = exponent
        super().__init__(f"received negative exponent ({exponent}); expected non-negative exponent")


# =============================================================================
# Linearization errors
# =============================================================================


class LinearExpressionRequiredError(SymbolicMathError, ValueError):
    def __init__(self, operation: str, expression: Any):
        self.operation = operation
        self.expression = expression
        super().__init__(
            f"Linear expression required for operation {operation}; received an expression "
            f"which is not linear ({_type_name(expression)})."
        )


class EqualityConstraintRequiredError(SymbolicMathError, ValueError):
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Equality constraint required for operation: {operation}")


class InequalityConstraintRequiredError(SymbolicMathError, ValueError):
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Inequality constraint required for operation: {operation}")


class CanNotGetLinearCoeffOfConstantError(SymbolicMathError, ValueError):
    """Linear coefficients were requested for a constant with no variable ordering."""

    def __init__(self, expression: Any):
        self.expression = expression
        super().__init__(
            f"linear coefficients error: cannot find linear coefficients of object {expression} "
            f"(type {_type_name(expression)}) which represents a constant"
        )


class EmptyLinearCoeffsError(SymbolicMathError, ValueError):
    def __init__(self, expression: Any):
        self.expression = expression
        super().__init__(
            f"the expression of type {_type_name(expression)} has no variables "
            "to compute linear coefficients for"
        )
