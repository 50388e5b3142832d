from .calculus import derivative_wrt, simplify, substitute, substitute_according_to
from .convert import (
    constant_matrix_from,
    constant_vector_from,
    identity,
    ones,
    to_expression,
    zeros,
)
from .dispatch import comparison, minus, multiply, plus, power, transpose
from .linalg import hstack, vstack
from .linear import (
    as_simplified_constraint,
    implies,
    is_linear,
    linear_coeff,
    linear_equality_representation,
    linear_inequality_representation,
)

__all__ = [
    # Dispatch
    "plus",
    "minus",
    "multiply",
    "transpose",
    "power",
    "comparison",
    # Conversion
    "to_expression",
    "constant_vector_from",
    "constant_matrix_from",
    "identity",
    "ones",
    "zeros",
    # Stacking
    "hstack",
    "vstack",
    # Linear structure
    "is_linear",
    "linear_coeff",
    "as_simplified_constraint",
    "linear_inequality_representation",
    "linear_equality_representation",
    "implies",
    # Calculus
    "derivative_wrt",
    "substitute",
    "substitute_according_to",
    "simplify",
]
