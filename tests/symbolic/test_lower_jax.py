import jax
import jax.numpy as jnp
import numpy as np
import pytest

from symbolicmath.symbolic import derivative_wrt
from symbolicmath.symbolic.expr import (
    Constant,
    ConstantMatrix,
    ScalarExpression,
    new_variable,
    new_variable_matrix,
    new_variable_vector,
)
from symbolicmath.symbolic.lowerers.jax import JaxLowerer, lower_to_jax


class UnregisteredExpr(ScalarExpression):
    def check(self):
        return None


def test_jaxlowerer_raises_when_no_visitor_registered():
    jl = JaxLowerer([])
    with pytest.raises(NotImplementedError) as excinfo:
        jl.lower(UnregisteredExpr())

    msg = str(excinfo.value)
    assert "JaxLowerer" in msg, "should mention the lowerer class name"
    assert "UnregisteredExpr" in msg, "should mention the expression class name"


def test_jax_lower_constant():
    f = lower_to_jax(Constant(2.5), [])
    assert jnp.allclose(f(jnp.zeros(0)), 2.5)


def test_jax_lower_variable_reads_its_slot():
    x, y = new_variable(), new_variable()
    f = lower_to_jax(y, [x, y])
    assert jnp.allclose(f(jnp.array([1.0, 7.0])), 7.0)


def test_jax_lower_unknown_variable_raises():
    x, y = new_variable(), new_variable()
    with pytest.raises(ValueError, match="not found in var_order"):
        lower_to_jax(x + 1.0, [y])


def test_jax_lower_polynomial():
    x, y = new_variable(), new_variable()
    expr = 3 * x**2 + 2 * x * y + 1.0
    f = lower_to_jax(expr, [x, y])
    assert jnp.allclose(f(jnp.array([1.0, 2.0])), 8.0)


def test_jax_grad_matches_symbolic_derivative():
    x, y = new_variable(), new_variable()
    expr = 3 * x**2 + 2 * x * y + 1.0
    order = [x, y]
    point = jnp.array([1.0, 2.0])

    grad = jax.grad(lower_to_jax(expr, order))(point)
    dx, dy = lower_to_jax([derivative_wrt(expr, x), derivative_wrt(expr, y)], order)
    assert jnp.allclose(grad, jnp.array([dx(point), dy(point)]))
    assert jnp.allclose(grad, jnp.array([10.0, 2.0]))


def test_jax_lower_matrix_vector_product():
    x = new_variable_vector(2)
    A = np.array([[1.0, 2.0], [3.0, 4.0]])
    f = lower_to_jax(ConstantMatrix.from_dense(A) @ x, list(x.elements))
    point = jnp.array([1.0, -1.0])
    out = f(point)
    assert out.shape == (2,)
    assert jnp.allclose(out, A @ np.array([1.0, -1.0]))


def test_jax_lower_matrix_shape():
    X = new_variable_matrix(2, 3)
    f = lower_to_jax(X, X.variables())
    out = f(jnp.arange(6.0))
    assert out.shape == (2, 3)
    assert jnp.allclose(out, jnp.arange(6.0).reshape(2, 3))


def test_jax_lower_jits():
    x = new_variable_vector(3)
    f = jax.jit(lower_to_jax(x.T @ x, list(x.elements)))
    assert jnp.allclose(f(jnp.array([1.0, 2.0, 2.0])), 9.0)


@pytest.mark.parametrize(
    "make, expected",
    [
        (lambda x: x.less_eq(1.0), 2.0),
        (lambda x: x.greater_eq(1.0), -2.0),
        (lambda x: x.eq(1.0), 2.0),
    ],
)
def test_jax_lower_constraint_residual(make, expected):
    x = new_variable()
    f = lower_to_jax(make(x), [x])
    assert jnp.allclose(f(jnp.array([3.0])), expected)


def test_jax_lower_vector_constraint_broadcasts_scalar_side():
    x = new_variable_vector(2)
    f = lower_to_jax(x.less_eq(1.0), list(x.elements))
    assert jnp.allclose(f(jnp.array([0.0, 2.0])), jnp.array([-1.0, 1.0]))
