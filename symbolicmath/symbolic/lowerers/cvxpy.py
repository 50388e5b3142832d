from typing import Any, Callable, Dict, Optional, Sequence, Type, Union

import cvxpy as cp

from symbolicmath.symbolic.expr import (
    Constant,
    ConstantMatrix,
    ConstantVector,
    ConstrSense,
    Constraint,
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
    VectorConstraint,
)

_CVXPY_VISITORS: Dict[Type[Any], Callable] = {}


def _stack_entries(entries) -> cp.Expression:
    # scalar expressions have shape (), hstack needs 1D arguments
    return cp.hstack([cp.reshape(entry, (1,), order="C") for entry in entries])


def visitor(expr_cls: Type[Any]):
    def register(fn: Callable[[Any, Any], cp.Expression]):
        _CVXPY_VISITORS[expr_cls] = fn
        return fn

    return register


def dispatch(lowerer: Any, expr: Any):
    fn = _CVXPY_VISITORS.get(type(expr))
    if fn is None:
        raise NotImplementedError(
            f"{lowerer.__class__.__name__!r} has no visitor for {type(expr).__name__}"
        )
    return fn(lowerer, expr)


class CvxpyLowerer:
    """
    Lowers symbolic expressions and constraints to CVXPy.

    CVXPy variables must be created externally and passed in during
    initialization, one scalar CVXPy expression per symbolic variable.
    Vectors lower to CVXPy expressions of shape ``(n,)`` and matrices to
    shape ``(m, n)``.
    """

    def __init__(self, variable_map: Optional[Dict[Variable, cp.Expression]] = None):
        """
        Initialize the CVXPy lowerer.

        Args:
            variable_map: Dictionary mapping symbolic variables to scalar CVXPy expressions
        """
        self.variable_map = dict(variable_map) if variable_map else {}

    def lower(self, expr: Union[Expression, Constraint]):
        """Lower a symbolic expression or constraint to CVXPy."""
        expr.check()
        return dispatch(self, expr)

    def register_variable(self, v: Variable, cvx_expr: cp.Expression):
        """Register a CVXPy variable/expression for use in lowering."""
        self.variable_map[v] = cvx_expr

    @visitor(Constant)
    def visit_constant(self, node: Constant) -> cp.Expression:
        return cp.Constant(node.value)

    @visitor(Variable)
    def visit_variable(self, node: Variable) -> cp.Expression:
        if node not in self.variable_map:
            raise ValueError(
                f"Variable '{node}' not found in variable_map. "
                f"Register it with register_variable() before lowering."
            )
        return self.variable_map[node]

    @visitor(Monomial)
    def visit_monomial(self, node: Monomial) -> cp.Expression:
        factors = [(v, e) for v, e in zip(node.variable_factors, node.exponents) if e != 0]
        if not factors:
            return cp.Constant(node.coefficient)
        if len(factors) > 1:
            raise NotImplementedError(
                f"Monomial {node} is a product of several variables, which is not "
                "DCP-compliant in CVXPy. Only single-variable monomials can be lowered."
            )
        v, e = factors[0]
        base = self.visit_variable(v)
        if e == 1:
            return node.coefficient * base
        return node.coefficient * cp.power(base, e)

    @visitor(Polynomial)
    def visit_polynomial(self, node: Polynomial) -> cp.Expression:
        terms = [self.lower(m) for m in node.monomials]
        result = terms[0]
        for term in terms[1:]:
            result = result + term
        return result

    @visitor(ConstantVector)
    @visitor(VariableVector)
    @visitor(MonomialVector)
    @visitor(PolynomialVector)
    def visit_vector(self, node) -> cp.Expression:
        return _stack_entries([self.lower(element) for element in node.elements])

    @visitor(ConstantMatrix)
    @visitor(VariableMatrix)
    @visitor(MonomialMatrix)
    @visitor(PolynomialMatrix)
    def visit_matrix(self, node) -> cp.Expression:
        rows = [_stack_entries([self.lower(element) for element in row]) for row in node.rows]
        # Stack rows vertically
        return cp.vstack(rows)

    @visitor(ScalarConstraint)
    @visitor(VectorConstraint)
    @visitor(MatrixConstraint)
    def visit_constraint(self, node: Constraint) -> cp.Constraint:
        left = self.lower(node.left)
        right = self.lower(node.right)
        if node.sense == ConstrSense.EQUAL:
            return left == right
        if node.sense == ConstrSense.GREATER_THAN_EQUAL:
            return left >= right
        return left <= right


def lower_to_cvxpy(
    expr: Union[Expression, Constraint],
    variable_map: Optional[Dict[Variable, cp.Expression]] = None,
):
    """
    Convenience function to lower a single expression to CVXPy.

    Args:
        expr: Expression or constraint to lower
        variable_map: Dictionary mapping symbolic variables to CVXPy expressions

    Returns:
        CVXPy expression or constraint

    Example:
        >>> import cvxpy as cp
        >>> x = new_variable()
        >>> xv = cp.Variable()
        >>> lower_to_cvxpy((2 * x).less_eq(4.0), {x: xv})
    """
    lowerer = CvxpyLowerer(variable_map)
    return lowerer.lower(expr)


def lower_linear_constraint(
    constraint: Constraint, x: cp.Expression, var_order: Optional[Sequence[Variable]] = None
) -> cp.Constraint:
    """Build ``A @ x <= b`` or ``A @ x == b`` from the linear representation of a constraint.

    Args:
        constraint: A linear constraint
        x: CVXPy vector whose entries follow ``var_order``
        var_order: Variable ordering of the columns of ``A`` (default: the
            constraint's own first-seen order)

    Returns:
        cp.Constraint: The affine CVXPy constraint
    """
    if constraint.sense == ConstrSense.EQUAL:
        A, b = constraint.linear_equality_representation(var_order)
        return A @ x == b
    A, b = constraint.linear_inequality_representation(var_order)
    return A @ x <= b
