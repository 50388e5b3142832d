"""Constraints between two expressions.

A constraint is a ``(left, right, sense)`` triple. Constraints are built by the
comparison operations of :class:`Expression` (``less_eq``, ``greater_eq``,
``eq`` and the ``<=``/``>=`` operators) and hold the original, unsimplified
sides. The broadcast dims of the two sides select the constraint class.

Example:
    Building and linearizing a constraint::

        x = new_variable_vector(2)
        c = x.less_eq([1.0, 2.0])  # VectorConstraint
        A, b = c.linear_inequality_representation()
"""

from dataclasses import dataclass
from typing import ClassVar, Dict, List, Optional, Sequence, Tuple

from symbolicmath.errors import InvalidMatrixIndexError, InvalidVectorIndexError

from .expr import Container, Expression
from .sense import ConstrSense
from .variable import Variable, unique_vars

_CONSTRAINT_CLASSES: Dict[Container, type] = {}


def constraint_class(container: Container):
    """Decorator to register the constraint class used for a container."""

    def register(cls):
        cls.container = container
        _CONSTRAINT_CLASSES[container] = cls
        return cls

    return register


def constraint_class_for(container: Container) -> type:
    return _CONSTRAINT_CLASSES[container]


@dataclass(frozen=True)
class Constraint:
    """Base class of scalar, vector and matrix constraints.

    Attributes:
        left: Left-hand side expression
        right: Right-hand side expression
        sense: Relation between the two sides
    """

    left: Expression
    right: Expression
    sense: ConstrSense

    container: ClassVar[Container]

    def check(self) -> None:
        """Check both sides, then that their dims agree up to scalar broadcast.

        Raises:
            ValidityError: If either side is invalid
            DimensionError: If the sides cannot be compared elementwise
        """
        from ..shape_checker import check_dims_elementwise

        self.left.check()
        self.right.check()
        check_dims_elementwise(self.left, self.right, "comparison")

    @property
    def dims(self) -> Tuple[int, int]:
        """Broadcast dims of the two sides."""
        if self.left.dims == (1, 1):
            return self.right.dims
        return self.left.dims

    def variables(self) -> List[Variable]:
        """Unique variables of the left side followed by new ones of the right side."""
        return unique_vars(self.left.variables() + self.right.variables())

    def is_linear(self) -> bool:
        return self.left.is_linear() and self.right.is_linear()

    def as_simplified_constraint(self) -> "Constraint":
        from ..linear import as_simplified_constraint

        return as_simplified_constraint(self)

    def linear_inequality_representation(self, var_order: Optional[Sequence[Variable]] = None):
        from ..linear import linear_inequality_representation

        return linear_inequality_representation(self, var_order)

    def linear_equality_representation(self, var_order: Optional[Sequence[Variable]] = None):
        from ..linear import linear_equality_representation

        return linear_equality_representation(self, var_order)

    def implies(self, other: "Constraint") -> bool:
        from ..linear import implies

        return implies(self, other)

    def substitute(self, v: Variable, replacement) -> "Constraint":
        """Substitute ``replacement`` for ``v`` on both sides."""
        left = self.left.substitute(v, replacement)
        right = self.right.substitute(v, replacement)
        return type(self)(left, right, self.sense)

    def substitute_according_to(self, mapping) -> "Constraint":
        return type(self)(
            self.left.substitute_according_to(mapping),
            self.right.substitute_according_to(mapping),
            self.sense,
        )

    def derivative_wrt(self, v: Variable) -> "Constraint":
        from ..calculus import derivative_wrt

        return derivative_wrt(self, v)

    def simplify(self) -> "Constraint":
        from ..calculus import simplify

        return simplify(self)

    def pretty(self, indent=0):
        pad = "  " * indent
        return "\n".join(
            [
                f"{pad}{self.__class__.__name__} ({self.sense})",
                self.left.pretty(indent + 1),
                self.right.pretty(indent + 1),
            ]
        )

    def __str__(self):
        return f"{self.left} {self.sense} {self.right}"

    def __repr__(self):
        return f"{self.__class__.__name__}({self})"


def _element(expr: Expression, ii: int, jj: int):
    # scalar sides broadcast against every element
    if expr.dims == (1, 1):
        return expr.grid()[0][0]
    return expr.grid()[ii][jj]


def _wide_side(constraint: Constraint) -> Expression:
    if constraint.left.dims != (1, 1):
        return constraint.left
    return constraint.right


@constraint_class(Container.SCALAR)
@dataclass(frozen=True)
class ScalarConstraint(Constraint):
    """A constraint between two scalar expressions."""


@constraint_class(Container.VECTOR)
@dataclass(frozen=True)
class VectorConstraint(Constraint):
    """An elementwise constraint where at least one side is a vector."""

    def len(self) -> int:
        return self.dims[0]

    def at_vec(self, idx: int) -> ScalarConstraint:
        """Scalar constraint between element ``idx`` of both sides.

        Scalar sides are broadcast.

        Raises:
            InvalidVectorIndexError: If ``idx`` is out of bounds for the vector side
        """
        self.check()
        if idx < 0 or idx >= self.dims[0]:
            raise InvalidVectorIndexError(idx, _wide_side(self))
        left, right = _element(self.left, idx, 0), _element(self.right, idx, 0)
        return ScalarConstraint(left, right, self.sense)


@constraint_class(Container.MATRIX)
@dataclass(frozen=True)
class MatrixConstraint(Constraint):
    """An elementwise constraint where at least one side is a matrix."""

    def at(self, ii: int, jj: int) -> ScalarConstraint:
        """Scalar constraint between element ``(ii, jj)`` of both sides.

        Raises:
            InvalidMatrixIndexError: If the indices are out of bounds for the matrix side
        """
        self.check()
        n_rows, n_cols = self.dims
        if ii < 0 or ii >= n_rows or jj < 0 or jj >= n_cols:
            raise InvalidMatrixIndexError(ii, jj, _wide_side(self))
        left, right = _element(self.left, ii, jj), _element(self.right, ii, jj)
        return ScalarConstraint(left, right, self.sense)


def variables_in_constraint(constraint: Constraint) -> List[Variable]:
    """Unique variables appearing on either side of ``constraint``."""
    return constraint.variables()
