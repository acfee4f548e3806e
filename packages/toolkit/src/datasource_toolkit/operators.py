from enum import Enum


class Operator(str, Enum):
    """Supported leaf operators."""

    # Comparison
    EQUAL = "Equal"
    NOT_EQUAL = "NotEqual"
    GREATER_THAN = "GreaterThan"
    LESS_THAN = "LessThan"

    # Membership
    IN = "In"
    NOT_IN = "NotIn"
    INCLUDES_ALL = "IncludesAll"

    # Null checks
    PRESENT = "Present"
    MISSING = "Missing"

    # Pattern matching
    LIKE = "Like"
    ILIKE = "ILike"
    CONTAINS = "Contains"
    NOT_CONTAINS = "NotContains"


class Aggregator(str, Enum):
    """Logical combinators of a condition tree branch."""

    AND = "And"
    OR = "Or"
