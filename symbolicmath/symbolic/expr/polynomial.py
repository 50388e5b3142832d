from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Tuple

from symbolicmath.errors import EmptyPolynomialError, UnsupportedInputError

from .expr import Container, Kind, ScalarExpression, expression_class
from .monomial import Monomial
from .variable import Variable, unique_vars


@expression_class(Container.SCALAR, Kind.POLYNOMIAL)
@dataclass(frozen=True)
class Polynomial(ScalarExpression):
    """A sum of monomials.

    The monomials are kept in the order they were produced; identical
    monomials are only combined by :meth:`simplify`.

    Attributes:
        monomials: Non-empty tuple of monomials
    """

    monomials: Tuple[Monomial, ...]

    def __post_init__(self):
        object.__setattr__(self, "monomials", tuple(self.monomials))

    def check(self) -> None:
        if len(self.monomials) == 0:
            raise EmptyPolynomialError()
        for monomial in self.monomials:
            if not isinstance(monomial, Monomial):
                raise UnsupportedInputError("Polynomial.check", monomial)
            monomial.check()

    def variables(self) -> List[Variable]:
        found = []
        for monomial in self.monomials:
            found.extend(monomial.variable_factors)
        return unique_vars(found)

    def constant(self) -> float:
        """Sum of the coefficients of all degree-0 monomials."""
        return sum(m.coefficient for m in self.monomials if m.degree() == 0)

    def degree(self) -> int:
        return max(m.degree() for m in self.monomials)

    def is_constant(self) -> bool:
        return all(m.is_constant() for m in self.monomials)

    def constant_monomial_index(self) -> int:
        """Index of the first constant monomial, or -1."""
        for ii, monomial in enumerate(self.monomials):
            if monomial.is_constant():
                return ii
        return -1

    def variable_monomial_index(self, v: Variable) -> int:
        """Index of the first monomial of the form ``c * v``, or -1."""
        for ii, monomial in enumerate(self.monomials):
            if monomial.is_variable(v):
                return ii
        return -1

    def monomial_index(self, m: Monomial) -> int:
        """Index of the first monomial with the same form as ``m``, or -1."""
        for ii, monomial in enumerate(self.monomials):
            if monomial.matches_form_of(m):
                return ii
        return -1

    def simplify(self) -> "Polynomial":
        """Combine monomials with identical variables and exponents.

        Groups are kept in order of first appearance. A combined monomial whose
        coefficient is exactly zero is dropped, unless dropping it would leave
        the polynomial empty, in which case a single zero constant remains.
        """
        groups: Dict[FrozenSet[Tuple[int, int]], Monomial] = {}
        for monomial in self.monomials:
            key = monomial.signature()
            if key in groups:
                first = groups[key]
                groups[key] = first.with_coefficient(first.coefficient + monomial.coefficient)
            else:
                groups[key] = monomial

        kept = tuple(m for m in groups.values() if m.coefficient != 0.0)
        if not kept:
            kept = (Monomial(0.0, (), ()),)
        return Polynomial(kept)

    def to_polynomial(self) -> "Polynomial":
        return self

    def pretty(self, indent=0):
        pad = "  " * indent
        lines = [f"{pad}Polynomial"]
        for monomial in self.monomials:
            lines.append(monomial.pretty(indent + 1))
        return "\n".join(lines)

    def __str__(self):
        return " + ".join(str(m) for m in self.monomials)

    def __repr__(self):
        return f"Polynomial({self})"
