"""Catalog checks for individual snap configurations."""

from dataclasses import dataclass, field
from typing import Any, Iterator

from slplint.config import DocumentConfig
from slplint.parser.syntax import parse_json
from .cache import SchemaCache


@dataclass
class NodeCheck:
    """Outcome of checking one snap configuration against the catalog."""
    valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def error(self, message: str) -> None:
        self.valid = False
        self.errors.append(message)

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "errors": self.errors, "warnings": self.warnings}


def check_node_config(config: dict[str, Any], cache: SchemaCache) -> NodeCheck:
    """Check a snap configuration against the catalog.

    Unknown snap types and missing identity fields are errors; a
    class_version that differs from the catalog's is only a warning.
    """
    check = NodeCheck()

    class_id = config.get("class_id")
    if not isinstance(class_id, str) or not class_id:
        check.error("Missing class_id")
    else:
        entry = cache.get(class_id)
        if entry is None:
            message = f"Unknown snap: {class_id}"
            suggestions = cache.suggest(class_id)
            if suggestions:
                message += f" (similar: {', '.join(s.class_id for s in suggestions)})"
            check.error(message)
        else:
            version = config.get("class_version")
            if version and version != entry.version:
                check.warnings.append(
                    f"Version mismatch: config has {version}, current is {entry.version}"
                )

    if not config.get("instance_id"):
        check.error("Missing instance_id")

    if not config.get("property_map"):
        check.error("Missing property_map")

    return check


def iter_node_configs(text: str, config: DocumentConfig | None = None) -> Iterator[tuple[str, dict[str, Any]]]:
    """Yield (snap key, snap configuration) pairs of a pipeline document.

    Raises:
        PipelineSyntaxError: If the text is not well-formed JSON
    """
    config = config or DocumentConfig()
    tree = parse_json(text)
    if not isinstance(tree, dict):
        return
    snap_map = tree.get(config.node_section)
    if not isinstance(snap_map, dict):
        return
    for key, entry in snap_map.items():
        if isinstance(entry, dict):
            yield key, entry
