from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .records import RecordData


@dataclass(frozen=True)
class Page:
    """Offset/limit window over an ordered result."""

    skip: int = 0
    limit: int | None = None

    def apply(self, records: Iterable[RecordData]) -> list[RecordData]:
        rows = list(records)
        end = None if self.limit is None else self.skip + self.limit
        return rows[self.skip : end]
