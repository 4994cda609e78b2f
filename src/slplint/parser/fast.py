"""Fast line scanner for the pre-commit path.

Walks the document one line at a time without building a tree. Each line is
split into JSON tokens by a single compiled regex, and a small container
stack records which section every open object belongs to:

    document -> snap section -> snap entry
             -> link section -> link entry

Keys are only counted while their container has the matching role, and
string values are only looked at for the pipeline class_id and the link
endpoints, so identifiers or "link" text inside notes never count.
"""

import json
import logging
import re

from slplint.config import DocumentConfig
from slplint.parser.document import EdgeRef, PipelineDocument
from slplint.parser.syntax import parse_json

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r'"(?:[^"\\]|\\.)*"|[{}\[\],:]|[^\s{}\[\],:"]+')

# Container roles
_OTHER = 0
_ROOT = 1
_NODES = 2
_EDGES = 3
_EDGE = 4

# Frame slots
_ROLE = 0
_IS_OBJECT = 1
_KEY = 2
_EXPECT_KEY = 3
_EDGE_INDEX = 4

# Edge record slots
_ENDPOINT_SLOTS = {"src_id": 1, "dst_id": 2, "src_view_id": 3, "dst_view_id": 4}


def _unquote(token: str) -> str:
    if "\\" in token:
        return json.loads(token)
    return token[1:-1]


class FastLineScanner:
    """Builds a PipelineDocument in one pass over the document lines."""

    mode = "fast"

    def __init__(self, config: DocumentConfig | None = None):
        self.config = config or DocumentConfig()
        self.identifier_re = re.compile(self.config.identifier_pattern)

    def build(self, text: str, source: str = "<string>") -> PipelineDocument:
        # The scanner assumes well-formed input; malformation is left to
        # the general-purpose parser.
        parse_json(text)
        return self.scan(text, source)

    def scan(self, text: str, source: str = "<string>") -> PipelineDocument:
        discriminator_key = self.config.discriminator_key
        node_section = self.config.node_section
        edge_section = self.config.edge_section
        identifier_match = self.identifier_re.fullmatch

        discriminator = None
        keys: set[str] = set()
        node_keys: list[str] = []
        node_ids: list[str] = []
        malformed: list[str] = []
        edges: list[list] = []

        stack: list[list] = []
        frame = None

        for line in text.split("\n"):
            for token in _TOKEN_RE.findall(line):
                first = token[0]

                if first == '"':
                    value = _unquote(token)
                    if frame is None:
                        continue
                    if frame[_EXPECT_KEY]:
                        frame[_EXPECT_KEY] = False
                        frame[_KEY] = value
                        role = frame[_ROLE]
                        if role == _ROOT:
                            keys.add(value)
                        elif role == _NODES:
                            node_keys.append(value)
                            if identifier_match(value):
                                node_ids.append(value)
                            else:
                                malformed.append(value)
                        elif role == _EDGES:
                            edges.append([value, None, None, None, None])
                        continue
                elif first in "{[":
                    is_object = first == "{"
                    if frame is None:
                        role = _ROOT if is_object else _OTHER
                    elif not is_object:
                        role = _OTHER
                    elif frame[_ROLE] == _ROOT and frame[_KEY] == node_section:
                        role = _NODES
                    elif frame[_ROLE] == _ROOT and frame[_KEY] == edge_section:
                        role = _EDGES
                    elif frame[_ROLE] == _EDGES:
                        role = _EDGE
                    else:
                        role = _OTHER
                    if frame is not None:
                        self._assign(frame, edges, None)
                        if frame[_ROLE] == _ROOT and frame[_KEY] == discriminator_key:
                            discriminator = None
                    frame = [role, is_object, None, is_object, len(edges) - 1]
                    stack.append(frame)
                    continue
                elif first in "}]":
                    stack.pop()
                    frame = stack[-1] if stack else None
                    continue
                elif first == ",":
                    if frame is not None and frame[_IS_OBJECT]:
                        frame[_EXPECT_KEY] = True
                    continue
                elif first == ":":
                    continue
                else:
                    value = None  # number, true, false, null

                if frame is None:
                    continue
                if frame[_ROLE] == _ROOT and frame[_KEY] == discriminator_key:
                    discriminator = value
                else:
                    self._assign(frame, edges, value)

        document = PipelineDocument(
            source=source,
            mode=self.mode,
            discriminator=discriminator,
            top_level_keys=frozenset(keys),
            node_keys=tuple(node_keys),
            node_ids=tuple(node_ids),
            malformed_node_keys=tuple(malformed),
            edges=tuple(EdgeRef(*record) for record in edges),
        )
        logger.debug(
            f"{source}: fast scan found {document.node_count} snaps, "
            f"{document.edge_count} links"
        )
        return document

    @staticmethod
    def _assign(frame: list, edges: list[list], value: str | None) -> None:
        """Record a value for a link endpoint key of the current link entry."""
        if frame[_ROLE] == _EDGE:
            slot = _ENDPOINT_SLOTS.get(frame[_KEY])
            if slot is not None:
                edges[frame[_EDGE_INDEX]][slot] = value
