"""Scaffolding of new linear pipelines."""

import json
import logging
import uuid
from pathlib import Path
from typing import Any

from slplint.config import DocumentConfig, ScaffoldConfig
from slplint.models import Link, Node, View, ViewType

logger = logging.getLogger(__name__)

IDENTIFIER_PREFIX = "11111111-1111-1111-1111-"
GRID_SPACING = 2


def snap_identifier(index: int) -> str:
    return f"{IDENTIFIER_PREFIX}{index:012d}"


class PipelineScaffolder:
    """Builds a pipeline that chains the given snap types output0 → input0."""

    def __init__(self, config: ScaffoldConfig | None = None, document: DocumentConfig | None = None):
        self.config = config or ScaffoldConfig()
        self.document = document or DocumentConfig()

    def build(self, snaps: list[str], label: str = "New Pipeline", author: str | None = None,
              notes: str = "", purpose: str = "") -> dict[str, Any]:
        """Assemble the pipeline document.

        Args:
            snaps: Snap class_ids in pipeline order
            label: Pipeline display name
            author: Overrides the configured author
            notes: Free-text notes stored in the pipeline info
            purpose: Free-text purpose stored in the pipeline info

        Returns:
            Pipeline document ready for json.dump
        """
        if not snaps:
            raise ValueError("A pipeline needs at least one snap")

        last = len(snaps) - 1
        nodes = []
        for index, class_id in enumerate(snaps):
            inputs = {} if index == 0 else {"input0": View(name="input0", view_type=ViewType.DOCUMENT)}
            outputs = {} if index == last else {"output0": View(name="output0", view_type=ViewType.DOCUMENT)}
            nodes.append(Node(
                instance_id=snap_identifier(index),
                class_id=class_id,
                class_version=1,
                instance_version=1,
                label=class_id.rsplit("-", 1)[-1].capitalize(),
                inputs=inputs,
                outputs=outputs,
            ))

        links = [
            Link(link_id=f"link{index}", src_id=nodes[index].instance_id, dst_id=nodes[index + 1].instance_id)
            for index in range(last)
        ]

        logger.debug(f"Scaffolded {len(nodes)} snap(s) and {len(links)} link(s)")

        return {
            self.document.discriminator_key: self.document.discriminator,
            "class_version": self.config.pipeline_class_version,
            "instance_id": str(uuid.uuid4()),
            "instance_version": 1,
            self.document.metadata_section: {
                "info": {
                    "label": {"value": label},
                    "author": {"value": author or self.config.author or ""},
                    "notes": {"value": notes},
                    "purpose": {"value": purpose},
                },
                "settings": {},
                "input": {},
                "output": {},
            },
            self.document.node_section: {node.instance_id: node.to_entry() for node in nodes},
            self.document.edge_section: {link.link_id: link.to_entry() for link in links},
            self.document.layout_section: {
                "detail_map": {
                    node.instance_id: {
                        "grid_x_int": index * GRID_SPACING + 1,
                        "grid_y_int": 1,
                        "index": index,
                    }
                    for index, node in enumerate(nodes)
                },
            },
        }


def write_pipeline(document: dict[str, Any], path: Path, force: bool = False) -> Path:
    """Write a pipeline document as pretty-printed JSON.

    Raises:
        FileExistsError: If path exists and force is not set
    """
    path = Path(path)
    if path.exists() and not force:
        raise FileExistsError(f"File '{path}' already exists. Use --force to overwrite.")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
    logger.info(f"Wrote pipeline to {path}")
    return path
