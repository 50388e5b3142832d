from typing import Any, Callable, Dict, Tuple

from symbolicmath.errors import DimensionError, MatrixDimensionError, VectorDimensionError

from .expr.expr import Container

_DIMS_CHECKS: Dict[str, Callable[[Any, Any, str], None]] = {}


def dims_check(*operations: str):
    """Decorator to register a dims check for one or more operation names."""

    def register(fn: Callable[[Any, Any, str], None]):
        for operation in operations:
            _DIMS_CHECKS[operation] = fn
        return fn

    return register


def check_dims(left: Any, right: Any, operation: str) -> None:
    """Check the dims of two operands using the check registered for ``operation``."""
    fn = _DIMS_CHECKS.get(operation)
    if fn is None:
        raise NotImplementedError(f"No dims rule for {operation}")
    fn(left, right, operation)


def _dimension_error(left: Any, right: Any, operation: str) -> DimensionError:
    """Most specific dimension error for a pair of operands."""
    if left.container == Container.VECTOR and right.container == Container.VECTOR:
        return VectorDimensionError(left.dims, right.dims, operation)
    if left.container == Container.MATRIX or right.container == Container.MATRIX:
        return MatrixDimensionError(left.dims, right.dims, operation)
    return DimensionError(left.dims, right.dims, operation)


def _is_scalar(dims: Tuple[int, int]) -> bool:
    return dims == (1, 1)


@dims_check("plus", "minus", "comparison")
def check_dims_elementwise(left: Any, right: Any, operation: str) -> None:
    """Dims must match exactly, or one operand must be scalar (broadcast)."""
    if _is_scalar(left.dims) or _is_scalar(right.dims):
        return
    if left.dims != right.dims:
        raise _dimension_error(left, right, operation)


@dims_check("multiply")
def check_dims_multiply(left: Any, right: Any, operation: str = "multiply") -> None:
    """``left.cols == right.rows``, or one operand must be scalar (scaling)."""
    if _is_scalar(left.dims) or _is_scalar(right.dims):
        return
    if left.dims[1] != right.dims[0]:
        raise _dimension_error(left, right, operation)


@dims_check("hstack")
def check_dims_hstack(left: Any, right: Any, operation: str = "hstack") -> None:
    """Horizontally stacked operands need the same number of rows."""
    if left.dims[0] != right.dims[0]:
        raise MatrixDimensionError(left.dims, right.dims, operation)


@dims_check("vstack")
def check_dims_vstack(left: Any, right: Any, operation: str = "vstack") -> None:
    """Vertically stacked operands need the same number of columns."""
    if left.dims[1] != right.dims[1]:
        raise MatrixDimensionError(left.dims, right.dims, operation)
