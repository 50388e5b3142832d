"""Backend lowerers.

``symbolicmath.symbolic.lowerers.jax`` turns expressions into ``jax.numpy``
callables and ``symbolicmath.symbolic.lowerers.cvxpy`` turns them into CVXPy
expressions and constraints. The symbolic core never imports these modules, so
jax and cvxpy are only loaded when a lowerer is used.
"""
