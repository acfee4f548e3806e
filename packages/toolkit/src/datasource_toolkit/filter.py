from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .condition_tree import ConditionTree
    from .page import Page
    from .sort import Sort


@dataclass(frozen=True)
class PaginatedFilter:
    """
    Immutable request shape: what to match, in which order, which window.

    ``None`` means "not constrained" for every attribute.
    """

    condition_tree: ConditionTree | None = None
    sort: Sort | None = None
    page: Page | None = None

    def override(self, **changes: Any) -> PaginatedFilter:
        """Return a copy with some attributes replaced."""
        return replace(self, **changes)
