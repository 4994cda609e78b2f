"""Extraction result shared by the fast and strict document builders."""

from dataclasses import dataclass, field
from typing import Any

from slplint.models.pipeline import Node


@dataclass(frozen=True)
class EdgeRef:
    """Endpoints of one link_map entry."""
    link_id: str
    src_id: str | None = None
    dst_id: str | None = None
    src_view: str | None = None
    dst_view: str | None = None


@dataclass(frozen=True)
class PipelineDocument:
    """What the validator needs to know about a pipeline document.

    Built once per validation run and never mutated. ``node_keys`` and
    ``edges`` keep duplicates in source order so that duplicate-key
    corruption stays visible to the identifier count check.
    """
    source: str
    mode: str
    discriminator: str | None = None
    top_level_keys: frozenset[str] = frozenset()
    node_keys: tuple[str, ...] = ()
    node_ids: tuple[str, ...] = ()
    malformed_node_keys: tuple[str, ...] = ()
    edges: tuple[EdgeRef, ...] = ()
    # Strict mode only
    nodes: tuple[Node, ...] = ()
    layout: dict[str, Any] | None = field(default=None, compare=False)

    @property
    def node_count(self) -> int:
        return len(self.node_keys)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    @property
    def distinct_node_ids(self) -> frozenset[str]:
        return frozenset(self.node_ids)

    @property
    def referenced_ids(self) -> frozenset[str]:
        """Every endpoint identifier mentioned by a link."""
        ids = set()
        for edge in self.edges:
            if edge.src_id is not None:
                ids.add(edge.src_id)
            if edge.dst_id is not None:
                ids.add(edge.dst_id)
        return frozenset(ids)

    def has_field(self, name: str) -> bool:
        return name in self.top_level_keys
