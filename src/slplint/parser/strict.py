"""Strict document builder: full parse, then a section-aware tree walk."""

import logging
import re

from slplint.config import DocumentConfig
from slplint.models.pipeline import Node
from slplint.parser.document import EdgeRef, PipelineDocument
from slplint.parser.syntax import PairsDict, parse_json

logger = logging.getLogger(__name__)


class StrictDocumentBuilder:
    """Builds a PipelineDocument from a fully parsed JSON tree.

    Only keys directly under the snap section count as snaps and only
    entries directly under the link section count as links, so identifiers
    mentioned in notes or labels never leak into the counts.
    """

    mode = "strict"

    def __init__(self, config: DocumentConfig | None = None):
        self.config = config or DocumentConfig()
        self.identifier_re = re.compile(self.config.identifier_pattern)

    def build(self, text: str, source: str = "<string>") -> PipelineDocument:
        tree = parse_json(text, keep_pairs=True)

        if not isinstance(tree, PairsDict):
            logger.debug(f"{source}: top-level JSON value is not an object")
            return PipelineDocument(source=source, mode=self.mode)

        discriminator = None
        keys = set()
        node_keys: list[str] = []
        node_ids: list[str] = []
        malformed: list[str] = []
        edges: list[EdgeRef] = []
        nodes: list[Node] = []
        layout = None

        for key, value in tree.pairs:
            keys.add(key)
            if key == self.config.discriminator_key:
                discriminator = value if isinstance(value, str) else None
            elif key == self.config.node_section and isinstance(value, PairsDict):
                for node_key, entry in value.pairs:
                    node_keys.append(node_key)
                    if self.identifier_re.fullmatch(node_key):
                        node_ids.append(node_key)
                    else:
                        malformed.append(node_key)
                    if isinstance(entry, dict):
                        nodes.append(Node.from_entry(node_key, entry))
            elif key == self.config.edge_section and isinstance(value, PairsDict):
                for link_id, entry in value.pairs:
                    edges.append(self._edge(link_id, entry))
            elif key == self.config.layout_section and isinstance(value, dict):
                layout = value

        document = PipelineDocument(
            source=source,
            mode=self.mode,
            discriminator=discriminator,
            top_level_keys=frozenset(keys),
            node_keys=tuple(node_keys),
            node_ids=tuple(node_ids),
            malformed_node_keys=tuple(malformed),
            edges=tuple(edges),
            nodes=tuple(nodes),
            layout=layout,
        )
        logger.debug(
            f"{source}: strict build found {document.node_count} snaps, "
            f"{document.edge_count} links"
        )
        return document

    @staticmethod
    def _edge(link_id: str, entry) -> EdgeRef:
        if not isinstance(entry, dict):
            return EdgeRef(link_id=link_id)

        def text(name: str) -> str | None:
            value = entry.get(name)
            return value if isinstance(value, str) else None

        return EdgeRef(
            link_id=link_id,
            src_id=text("src_id"),
            dst_id=text("dst_id"),
            src_view=text("src_view_id"),
            dst_view=text("dst_view_id"),
        )
