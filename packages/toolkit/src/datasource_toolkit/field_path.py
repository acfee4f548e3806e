"""Colon-delimited field paths (``relationA:relationB:field``)."""

from __future__ import annotations

from dataclasses import dataclass

SEPARATOR = ":"


@dataclass(frozen=True)
class FieldPath:
    """
    A field path parsed once into its segments.

    The last segment is the attribute; the ones before it are the relations
    traversed in order.
    """

    segments: tuple[str, ...]

    @classmethod
    def parse(cls, path: str | FieldPath) -> FieldPath:
        if isinstance(path, FieldPath):
            return path
        segments = tuple(path.split(SEPARATOR))
        if not all(segments):
            raise ValueError(f"Invalid field path: '{path}'")
        return cls(segments)

    @property
    def head(self) -> str:
        return self.segments[0]

    @property
    def tail(self) -> FieldPath | None:
        """The path below the first relation, ``None`` for a local field."""
        if len(self.segments) == 1:
            return None
        return FieldPath(self.segments[1:])

    @property
    def relations(self) -> tuple[str, ...]:
        return self.segments[:-1]

    @property
    def field(self) -> str:
        return self.segments[-1]

    @property
    def is_local(self) -> bool:
        return len(self.segments) == 1

    def nest(self, prefix: str | None) -> FieldPath:
        if not prefix:
            return self
        return FieldPath((*FieldPath.parse(prefix).segments, *self.segments))

    def __str__(self) -> str:
        return SEPARATOR.join(self.segments)
