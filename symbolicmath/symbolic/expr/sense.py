from enum import Enum


class ConstrSense(Enum):
    """Relation between the two sides of a constraint."""

    EQUAL = "="
    LESS_THAN_EQUAL = "<="
    GREATER_THAN_EQUAL = ">="

    def reverse(self) -> "ConstrSense":
        """Sense obtained by swapping the two sides (or negating both)."""
        if self is ConstrSense.LESS_THAN_EQUAL:
            return ConstrSense.GREATER_THAN_EQUAL
        if self is ConstrSense.GREATER_THAN_EQUAL:
            return ConstrSense.LESS_THAN_EQUAL
        return self

    def __str__(self):
        return self.value
