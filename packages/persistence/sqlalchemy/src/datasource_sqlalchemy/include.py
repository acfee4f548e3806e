"""Include trees: which relations to join and which of their columns to select."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from datasource_toolkit.field_path import FieldPath

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True)
class IncludeNode:
    association: str
    attributes: tuple[str, ...] = ()
    include: tuple[IncludeNode, ...] = ()


@dataclass
class _Group:
    attributes: list[str] = field(default_factory=list)
    projected: list[str] = field(default_factory=list)
    join_only: list[str] = field(default_factory=list)


def build_include_tree(
    projection: Iterable[str], join_only: Iterable[str] | None = None
) -> tuple[IncludeNode, ...]:
    """
    Group relation paths by their first hop, in first-seen order.

    Columns directly under a hop become the node ``attributes``; longer
    suffixes recurse.  Paths from *join_only* produce nodes (and nested
    nodes) but never attributes.  Local paths are ignored.
    """
    groups: dict[str, _Group] = {}

    for paths, selected in ((projection, True), (join_only or (), False)):
        for path in paths:
            parsed = FieldPath.parse(path)
            if parsed.tail is None:
                continue
            group = groups.setdefault(parsed.head, _Group())
            if not parsed.tail.is_local:
                (group.projected if selected else group.join_only).append(str(parsed.tail))
            elif selected:
                group.attributes.append(parsed.tail.field)

    return tuple(
        IncludeNode(
            association,
            tuple(dict.fromkeys(group.attributes)),
            build_include_tree(group.projected, group.join_only),
        )
        for association, group in groups.items()
    )
