"""First-order derivatives, substitution and simplification.

Scalar rules are registered per expression class with the
:func:`derivative_visitor` and :func:`substitute_visitor` decorators. Vectors
and matrices apply the scalar rules elementwise and keep their shape;
constraints apply them to both sides.
"""

import functools
from typing import Any, Callable, Dict, Iterable, Mapping, Tuple, Type, Union

from symbolicmath.errors import UnsupportedInputError

from .convert import to_expression
from .dispatch import scalar_multiply, scalar_plus
from .expr import (
    Constant,
    Constraint,
    Container,
    Expression,
    Kind,
    Monomial,
    Polynomial,
    ScalarExpression,
    Variable,
    assemble,
)

DerivativeRule = Callable[[Any, Variable], ScalarExpression]
SubstituteRule = Callable[[Any, Variable, ScalarExpression], ScalarExpression]

_DERIVATIVE_VISITORS: Dict[Type[Any], DerivativeRule] = {}
_SUBSTITUTE_VISITORS: Dict[Type[Any], SubstituteRule] = {}


def derivative_visitor(expr_cls: Type[Any]):
    """Decorator to register a derivative rule for a scalar expression class."""

    def register(fn):
        _DERIVATIVE_VISITORS[expr_cls] = fn
        return fn

    return register


def substitute_visitor(expr_cls: Type[Any]):
    """Decorator to register a substitution rule for a scalar expression class."""

    def register(fn):
        _SUBSTITUTE_VISITORS[expr_cls] = fn
        return fn

    return register


def _lookup(table: Dict[Type[Any], Callable], expr: Any, name: str) -> Callable:
    fn = table.get(type(expr))
    if fn is None:
        raise NotImplementedError(f"No {name} rule for {type(expr).__name__}")
    return fn


def _map_elements(
    expr: Expression, fn: Callable[[ScalarExpression], ScalarExpression]
) -> Expression:
    if expr.container == Container.SCALAR:
        return fn(expr)
    rows = tuple(tuple(fn(element) for element in row) for row in expr.grid())
    return assemble(rows, expr.container)


def _require_variable(v: Any, function_name: str) -> Variable:
    if not isinstance(v, Variable):
        raise UnsupportedInputError(function_name, v)
    v.check()
    return v


# =============================================================================
# Derivatives
# =============================================================================


@derivative_visitor(Constant)
def _derivative_constant(expr: Constant, v: Variable):
    return Constant(0.0)


@derivative_visitor(Variable)
def _derivative_variable(expr: Variable, v: Variable):
    return Constant(1.0 if expr == v else 0.0)


@derivative_visitor(Monomial)
def _derivative_monomial(expr: Monomial, v: Variable):
    exponent = expr.exponent_of(v)
    if exponent == 0:
        return Constant(0.0)

    factors, exponents = [], []
    for f, e in zip(expr.variable_factors, expr.exponents):
        if f != v:
            factors.append(f)
            exponents.append(e)
        elif f not in factors and exponent > 1:
            # repeated factors of v are merged into the first occurrence
            factors.append(f)
            exponents.append(exponent - 1)
    return Monomial(expr.coefficient * exponent, tuple(factors), tuple(exponents))


@derivative_visitor(Polynomial)
def _derivative_polynomial(expr: Polynomial, v: Variable):
    terms = []
    for monomial in expr.monomials:
        d = _derivative_monomial(monomial, v)
        if isinstance(d, Monomial):
            terms.append(d)
    if not terms:
        return Constant(0.0)
    return Polynomial(tuple(terms))


def derivative_wrt(expr: Union[Expression, Constraint], v: Variable):
    """Partial derivative of ``expr`` with respect to ``v``.

    Example:
        >>> x = new_variable()
        >>> derivative_wrt(3 * x**2, x)
        Monomial(6 x_0)
    """
    v = _require_variable(v, "derivative_wrt")
    if isinstance(expr, Constraint):
        left, right = derivative_wrt(expr.left, v), derivative_wrt(expr.right, v)
        return type(expr)(left, right, expr.sense)
    expr.check()

    def rule(element):
        return _lookup(_DERIVATIVE_VISITORS, element, "derivative")(element, v)

    return _map_elements(expr, rule)


# =============================================================================
# Substitution
# =============================================================================


@substitute_visitor(Constant)
def _substitute_constant(expr: Constant, v: Variable, replacement: ScalarExpression):
    return expr


@substitute_visitor(Variable)
def _substitute_variable(expr: Variable, v: Variable, replacement: ScalarExpression):
    return replacement if expr == v else expr


@substitute_visitor(Monomial)
def _substitute_monomial(expr: Monomial, v: Variable, replacement: ScalarExpression):
    exponent = expr.exponent_of(v)
    if exponent == 0:
        return expr

    rest = [(f, e) for f, e in zip(expr.variable_factors, expr.exponents) if f != v]
    result = Monomial(expr.coefficient, tuple(f for f, _ in rest), tuple(e for _, e in rest))
    for _ in range(exponent):
        result = scalar_multiply(result, replacement)
    if result.kind == Kind.POLYNOMIAL:
        return result.simplify()
    return result


@substitute_visitor(Polynomial)
def _substitute_polynomial(expr: Polynomial, v: Variable, replacement: ScalarExpression):
    if all(m.exponent_of(v) == 0 for m in expr.monomials):
        return expr
    terms = [_substitute_monomial(m, v, replacement) for m in expr.monomials]
    return functools.reduce(scalar_plus, terms).to_polynomial().simplify()


def substitute(expr: Union[Expression, Constraint], v: Variable, replacement: Any):
    """Replace every occurrence of ``v`` in ``expr`` by ``replacement``.

    ``replacement`` must be a scalar expression or a real number. A factor
    ``v^k`` becomes ``replacement`` multiplied in ``k`` times, and any
    polynomial produced is simplified.

    Raises:
        UnsupportedInputError: If ``v`` is not a Variable or ``replacement`` is not scalar
    """
    v = _require_variable(v, "substitute")
    if isinstance(expr, Constraint):
        left = substitute(expr.left, v, replacement)
        right = substitute(expr.right, v, replacement)
        return type(expr)(left, right, expr.sense)
    replacement = to_expression(replacement, "substitute")
    if replacement.container != Container.SCALAR:
        raise UnsupportedInputError("substitute", replacement)
    replacement.check()
    expr.check()
    def rule(element):
        return _lookup(_SUBSTITUTE_VISITORS, element, "substitution")(element, v, replacement)

    return _map_elements(expr, rule)


def substitute_according_to(
    expr: Union[Expression, Constraint],
    mapping: Union[Mapping[Variable, Any], Iterable[Tuple[Variable, Any]]],
):
    """Apply several substitutions in turn.

    Args:
        expr: Expression or constraint to substitute into
        mapping: Dict from variable to replacement, or an iterable of
            ``(variable, replacement)`` pairs applied in order
    """
    pairs = mapping.items() if isinstance(mapping, Mapping) else mapping
    for v, replacement in pairs:
        expr = substitute(expr, v, replacement)
    return expr


# =============================================================================
# Simplification
# =============================================================================


def _simplify_element(element: ScalarExpression) -> ScalarExpression:
    if isinstance(element, Polynomial):
        return element.simplify()
    return element


def simplify(expr: Union[Expression, Constraint]):
    """Combine identical monomials of every polynomial in ``expr``.

    Non-polynomial scalars are returned unchanged and containers keep their
    shape and kind.
    """
    if isinstance(expr, Constraint):
        return type(expr)(simplify(expr.left), simplify(expr.right), expr.sense)
    expr.check()
    return _map_elements(expr, _simplify_element)
