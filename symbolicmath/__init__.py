# Core symbolic expressions - flat namespace for most common functions
import symbolicmath.errors as errors
from symbolicmath.config import RenderConfig, render_config
from symbolicmath.symbolic import (
    as_simplified_constraint,
    comparison,
    constant_matrix_from,
    constant_vector_from,
    derivative_wrt,
    hstack,
    identity,
    implies,
    is_linear,
    linear_coeff,
    linear_equality_representation,
    linear_inequality_representation,
    minus,
    multiply,
    ones,
    plus,
    power,
    simplify,
    substitute,
    substitute_according_to,
    to_expression,
    transpose,
    vstack,
    zeros,
)
from symbolicmath.symbolic.expr import (
    BACKGROUND_ENVIRONMENT,
    Constant,
    ConstantMatrix,
    ConstantVector,
    ConstrSense,
    Constraint,
    Environment,
    Expression,
    MatrixConstraint,
    Monomial,
    MonomialMatrix,
    MonomialVector,
    Polynomial,
    PolynomialMatrix,
    PolynomialVector,
    ScalarConstraint,
    Variable,
    VariableMatrix,
    VariableVector,
    VarType,
    VectorConstraint,
    new_binary_variable,
    new_variable,
    new_variable_matrix,
    new_variable_vector,
    variables_in_constraint,
)

__all__ = [
    # Core base class
    "Expression",
    # Atoms
    "Constant",
    "Variable",
    "VarType",
    "Environment",
    "BACKGROUND_ENVIRONMENT",
    "new_variable",
    "new_binary_variable",
    # Terms
    "Monomial",
    "Polynomial",
    # Vectors
    "ConstantVector",
    "VariableVector",
    "MonomialVector",
    "PolynomialVector",
    "new_variable_vector",
    # Matrices
    "ConstantMatrix",
    "VariableMatrix",
    "MonomialMatrix",
    "PolynomialMatrix",
    "new_variable_matrix",
    # Constraints
    "ConstrSense",
    "Constraint",
    "ScalarConstraint",
    "VectorConstraint",
    "MatrixConstraint",
    "variables_in_constraint",
    # Operations
    "plus",
    "minus",
    "multiply",
    "transpose",
    "power",
    "comparison",
    "hstack",
    "vstack",
    # Conversion and dense helpers
    "to_expression",
    "constant_vector_from",
    "constant_matrix_from",
    "identity",
    "ones",
    "zeros",
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
    # Configuration
    "RenderConfig",
    "render_config",
    # Submodules
    "errors",
]
