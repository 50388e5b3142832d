from typing import Any, Callable, Dict, Sequence, Type, Union

import jax.numpy as jnp

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

_JAX_VISITORS: Dict[Type[Any], Callable] = {}


def visitor(expr_cls: Type[Any]):
    def register(fn: Callable[[Any, Any], Callable]):
        _JAX_VISITORS[expr_cls] = fn
        return fn

    return register


def dispatch(lowerer: Any, expr: Any):
    fn = _JAX_VISITORS.get(type(expr))
    if fn is None:
        raise NotImplementedError(
            f"{lowerer.__class__.__name__!r} has no visitor for {type(expr).__name__}"
        )
    return fn(lowerer, expr)


class JaxLowerer:
    """Lowers symbolic expressions to ``jax.numpy`` callables.

    Every lowered callable takes a single flat array ``x`` holding the value of
    each variable, in the order given by ``var_order``. Vectors lower to arrays
    of shape ``(n,)`` and matrices to arrays of shape ``(m, n)``.

    Constraints lower to residuals that are ``<= 0`` exactly when an inequality
    constraint holds (``left - right`` for ``<=``, ``right - left`` for ``>=``),
    and ``== 0`` when an equality constraint holds.
    """

    def __init__(self, var_order: Sequence[Variable]):
        """
        Initialize the JAX lowerer.

        Args:
            var_order: Variables in the order of the entries of the argument vector
        """
        self.var_order = list(var_order)
        self._index = {v.id: ii for ii, v in enumerate(self.var_order)}

    def lower(self, expr: Union[Expression, Constraint]):
        """Lower an expression or constraint to a callable ``f(x)``."""
        expr.check()
        return dispatch(self, expr)

    def _variable_index(self, v: Variable) -> int:
        if v.id not in self._index:
            raise ValueError(f"Variable '{v}' not found in var_order.")
        return self._index[v.id]

    @visitor(Constant)
    def visit_constant(self, node: Constant):
        # capture the constant value once
        value = jnp.array(node.value)
        return lambda x: value

    @visitor(Variable)
    def visit_variable(self, node: Variable):
        idx = self._variable_index(node)
        return lambda x: x[idx]

    @visitor(Monomial)
    def visit_monomial(self, node: Monomial):
        coefficient = node.coefficient
        factors = [
            (self._variable_index(v), e) for v, e in zip(node.variable_factors, node.exponents)
        ]

        def fn(x):
            out = jnp.array(coefficient)
            for idx, e in factors:
                out = out * x[idx] ** e
            return out

        return fn

    @visitor(Polynomial)
    def visit_polynomial(self, node: Polynomial):
        fns = [self.lower(m) for m in node.monomials]

        def fn(x):
            out = fns[0](x)
            for f in fns[1:]:
                out = out + f(x)
            return out

        return fn

    @visitor(ConstantVector)
    @visitor(VariableVector)
    @visitor(MonomialVector)
    @visitor(PolynomialVector)
    def visit_vector(self, node):
        fns = [self.lower(element) for element in node.elements]
        return lambda x: jnp.stack([f(x) for f in fns])

    @visitor(ConstantMatrix)
    @visitor(VariableMatrix)
    @visitor(MonomialMatrix)
    @visitor(PolynomialMatrix)
    def visit_matrix(self, node):
        fns = [[self.lower(element) for element in row] for row in node.rows]
        return lambda x: jnp.stack([jnp.stack([f(x) for f in row]) for row in fns])

    @visitor(ScalarConstraint)
    @visitor(VectorConstraint)
    @visitor(MatrixConstraint)
    def visit_constraint(self, node: Constraint):
        """Lower a constraint to its residual.

        ``left <= right`` and ``left == right`` lower to ``left - right`` and
        ``left >= right`` lowers to ``right - left``.
        """
        fL = self.lower(node.left)
        fR = self.lower(node.right)
        if node.sense == ConstrSense.GREATER_THAN_EQUAL:
            return lambda x: fR(x) - fL(x)
        return lambda x: fL(x) - fR(x)


def lower_to_jax(
    exprs: Union[Expression, Constraint, Sequence[Union[Expression, Constraint]]],
    var_order: Sequence[Variable],
):
    """Lower symbolic expression(s) to JAX callable(s).

    Convenience wrapper that creates a JaxLowerer and lowers one or more
    expressions. The resulting functions can be JIT-compiled and
    differentiated with ``jax.grad``/``jax.jacfwd``.

    Args:
        exprs: Single expression/constraint or a sequence of them
        var_order: Variables in the order of the entries of the argument vector

    Returns:
        A single callable ``f(x)`` for a single input, a list of callables otherwise
    """
    jl = JaxLowerer(var_order)
    if isinstance(exprs, (Expression, Constraint)):
        return jl.lower(exprs)
    return [jl.lower(e) for e in exprs]
