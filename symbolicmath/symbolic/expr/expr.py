from enum import IntEnum
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence, Tuple, Type

from symbolicmath.errors import UnsupportedInputError

if TYPE_CHECKING:
    from .constraint import Constraint
    from .sense import ConstrSense
    from .variable import Variable


class Kind(IntEnum):
    """Rank of a scalar expression kind in the promotion lattice.

    The ordering is meaningful: a kind can always be promoted to any kind of a
    higher rank, except that a Constant can never become a Variable.
    """

    CONSTANT = 0
    VARIABLE = 1
    MONOMIAL = 2
    POLYNOMIAL = 3


class Container(IntEnum):
    """Shape class of an expression: scalar, column vector or matrix."""

    SCALAR = 0
    VECTOR = 1
    MATRIX = 2


_EXPRESSION_CLASSES: Dict[Tuple[Container, Kind], Type["Expression"]] = {}


def expression_class(container: Container, kind: Kind):
    """Decorator to register a concrete expression class for a (container, kind) pair."""

    def register(cls):
        cls.container = container
        cls.kind = kind
        _EXPRESSION_CLASSES[(container, kind)] = cls
        return cls

    return register


def class_for(container: Container, kind: Kind) -> Type["Expression"]:
    return _EXPRESSION_CLASSES[(container, kind)]


def container_for_dims(dims: Tuple[int, int]) -> Container:
    """Container of a result with the given dims.

    ``(1, 1)`` results are scalars and single-column results are vectors.
    """
    n_rows, n_cols = dims
    if (n_rows, n_cols) == (1, 1):
        return Container.SCALAR
    if n_cols == 1:
        return Container.VECTOR
    return Container.MATRIX


class Expression:
    """Base class for every symbolic value: scalars, vectors and matrices.

    Expressions are immutable. Arithmetic never mutates an operand; it goes
    through the promotion/dispatch engine in :mod:`symbolicmath.symbolic.dispatch`
    and returns a new expression whose kind is the least general kind able to
    hold the result.

    Supported operators:

    - ``+``, ``-`` (elementwise, with scalar broadcast)
    - ``*`` and ``@`` (matrix product, or scaling when one side is scalar)
    - ``**`` with a non-negative integer exponent
    - ``<=`` and ``>=`` build constraints; use :meth:`eq` for equality
      constraints since ``==`` compares values
    - ``.T`` transposes

    Attributes:
        __array_priority__: Priority for operations with numpy arrays (set to 1000)
        container: Scalar, vector or matrix (set by :func:`expression_class`)
        kind: Scalar kind of the elements (set by :func:`expression_class`)
    """

    # Give Expression objects higher priority than numpy arrays in operations
    __array_priority__ = 1000

    container: Container
    kind: Kind

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @property
    def dims(self) -> Tuple[int, int]:
        """Dimensions of the expression as ``(rows, cols)``; scalars are ``(1, 1)``."""
        raise NotImplementedError(f"dims not implemented for {self.__class__.__name__}")

    def check(self) -> None:
        """Verify the structural invariants of the expression.

        Raises:
            ValidityError: The first violated invariant
        """
        raise NotImplementedError(f"check() not implemented for {self.__class__.__name__}")

    def grid(self) -> Tuple[Tuple["ScalarExpression", ...], ...]:
        """Return the scalar elements of the expression in row-major order."""
        raise NotImplementedError(f"grid() not implemented for {self.__class__.__name__}")

    def variables(self) -> List["Variable"]:
        """Unique variables of the expression, in first-seen order."""
        from .variable import unique_vars

        found = []
        for row in self.grid():
            for element in row:
                found.extend(element.variables())
        return unique_vars(found)

    def is_scalar_like(self) -> bool:
        return self.dims == (1, 1)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def plus(self, other) -> "Expression":
        from ..dispatch import plus

        return plus(self, other)

    def minus(self, other) -> "Expression":
        from ..dispatch import minus

        return minus(self, other)

    def multiply(self, other) -> "Expression":
        from ..dispatch import multiply

        return multiply(self, other)

    def transpose(self) -> "Expression":
        from ..dispatch import transpose

        return transpose(self)

    def power(self, exponent: int) -> "Expression":
        from ..dispatch import power

        return power(self, exponent)

    def comparison(self, other, sense: "ConstrSense") -> "Constraint":
        from ..dispatch import comparison

        return comparison(self, other, sense)

    def less_eq(self, other) -> "Constraint":
        from .sense import ConstrSense

        return self.comparison(other, ConstrSense.LESS_THAN_EQUAL)

    def greater_eq(self, other) -> "Constraint":
        from .sense import ConstrSense

        return self.comparison(other, ConstrSense.GREATER_THAN_EQUAL)

    def eq(self, other) -> "Constraint":
        from .sense import ConstrSense

        return self.comparison(other, ConstrSense.EQUAL)

    def __add__(self, other):
        return self.plus(other)

    def __radd__(self, other):
        from ..dispatch import plus

        return plus(other, self)

    def __sub__(self, other):
        return self.minus(other)

    def __rsub__(self, other):
        # e.g. 5 - x  =>  minus(Constant(5), x)
        from ..dispatch import minus

        return minus(other, self)

    def __mul__(self, other):
        return self.multiply(other)

    def __rmul__(self, other):
        from ..dispatch import multiply

        return multiply(other, self)

    def __matmul__(self, other):
        return self.multiply(other)

    def __rmatmul__(self, other):
        from ..dispatch import multiply

        return multiply(other, self)

    def __neg__(self):
        return self.multiply(-1.0)

    def __pow__(self, exponent):
        return self.power(exponent)

    def __le__(self, other):
        return self.less_eq(other)

    def __ge__(self, other):
        return self.greater_eq(other)

    @property
    def T(self) -> "Expression":
        """Transpose property, equivalent to :meth:`transpose`.

        Example:
            >>> x = new_variable_vector(3)
            >>> x.T.dims
            (1, 3)
        """
        return self.transpose()

    # ------------------------------------------------------------------
    # Calculus and linear structure
    # ------------------------------------------------------------------

    def derivative_wrt(self, v: "Variable") -> "Expression":
        from ..calculus import derivative_wrt

        return derivative_wrt(self, v)

    def substitute(self, v: "Variable", replacement) -> "Expression":
        from ..calculus import substitute

        return substitute(self, v, replacement)

    def substitute_according_to(self, mapping) -> "Expression":
        from ..calculus import substitute_according_to

        return substitute_according_to(self, mapping)

    def simplify(self) -> "Expression":
        from ..calculus import simplify

        return simplify(self)

    def is_linear(self) -> bool:
        from ..linear import is_linear

        return is_linear(self)

    def linear_coeff(self, var_order: Optional[Sequence["Variable"]] = None):
        from ..linear import linear_coeff

        return linear_coeff(self, var_order)

    def degree(self) -> int:
        """Highest total degree among all elements."""
        return max(element.degree() for row in self.grid() for element in row)

    def pretty(self, indent=0):
        """Generate an indented, hierarchical view of the expression.

        Example:
            >>> print((x + 3).pretty())
            Polynomial
              Monomial x_0
              Monomial 3
        """
        pad = "  " * indent
        lines = [f"{pad}{self.__class__.__name__}"]
        for row in self.grid():
            for element in row:
                lines.append(element.pretty(indent + 1))
        return "\n".join(lines)


class ScalarExpression(Expression):
    """Base class for the four scalar kinds."""

    @property
    def dims(self) -> Tuple[int, int]:
        return (1, 1)

    def grid(self):
        return ((self,),)

    def pretty(self, indent=0):
        return f"{'  ' * indent}{self.__class__.__name__} {self}"

    def constant(self) -> float:
        raise NotImplementedError(f"constant() not implemented for {self.__class__.__name__}")

    def to_monomial(self):
        raise UnsupportedInputError(f"{self.__class__.__name__}.to_monomial", self)

    def to_polynomial(self):
        raise NotImplementedError(f"to_polynomial() not implemented for {self.__class__.__name__}")


def promote(element: ScalarExpression, kind: Kind) -> ScalarExpression:
    """Convert a scalar to an equal-valued scalar of a higher kind."""
    if element.kind == kind:
        return element
    if kind == Kind.MONOMIAL:
        return element.to_monomial()
    if kind == Kind.POLYNOMIAL:
        return element.to_polynomial()
    raise UnsupportedInputError(f"promote to {kind.name.lower()}", element)


def resolve_kind(kinds: Iterable[Kind]) -> Kind:
    """Least general kind able to hold every kind in ``kinds``."""
    kinds = set(kinds)
    kind = max(kinds)
    if kind == Kind.VARIABLE and Kind.CONSTANT in kinds:
        # a constant cannot be held by a variable
        return Kind.MONOMIAL
    return kind


def assemble(rows: Sequence[Sequence[ScalarExpression]], container: Container) -> Expression:
    """Build an expression of the given container from a grid of scalars.

    The element kind of the result is resolved from the elements themselves and
    every element is promoted to it, so a container never mixes kinds.
    """
    if container == Container.SCALAR:
        return rows[0][0]

    kind = resolve_kind(element.kind for row in rows for element in row)
    promoted = tuple(tuple(promote(element, kind) for element in row) for row in rows)
    cls = class_for(container, kind)
    if container == Container.VECTOR:
        return cls(tuple(row[0] for row in promoted))
    return cls(promoted)
