# Atoms
from .constant import Constant

# Constraints
from .constraint import (
    Constraint,
    MatrixConstraint,
    ScalarConstraint,
    VectorConstraint,
    constraint_class_for,
    variables_in_constraint,
)

# Core base classes and the kind lattice
from .expr import (
    Container,
    Expression,
    Kind,
    ScalarExpression,
    assemble,
    class_for,
    container_for_dims,
    promote,
    resolve_kind,
)

# Matrices
from .matrix import (
    ConstantMatrix,
    MatrixExpression,
    MonomialMatrix,
    PolynomialMatrix,
    VariableMatrix,
    new_variable_matrix,
)

# Terms
from .monomial import Monomial, monomial_product
from .polynomial import Polynomial
from .sense import ConstrSense
from .variable import (
    BACKGROUND_ENVIRONMENT,
    Environment,
    Variable,
    VarType,
    new_binary_variable,
    new_variable,
    unique_vars,
)

# Vectors
from .vector import (
    ConstantVector,
    MonomialVector,
    PolynomialVector,
    VariableVector,
    VectorExpression,
    new_variable_vector,
)

__all__ = [
    # Core base classes and the kind lattice
    "Expression",
    "ScalarExpression",
    "Kind",
    "Container",
    "class_for",
    "container_for_dims",
    "promote",
    "resolve_kind",
    "assemble",
    # Atoms
    "Constant",
    "Variable",
    "VarType",
    "Environment",
    "BACKGROUND_ENVIRONMENT",
    "new_variable",
    "new_binary_variable",
    "unique_vars",
    # Terms
    "Monomial",
    "monomial_product",
    "Polynomial",
    # Vectors
    "VectorExpression",
    "ConstantVector",
    "VariableVector",
    "MonomialVector",
    "PolynomialVector",
    "new_variable_vector",
    # Matrices
    "MatrixExpression",
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
    "constraint_class_for",
    "variables_in_constraint",
]
