"""Models for SnapLogic snaps, views and links."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ViewType(str, Enum):
    """Data shape flowing through a snap view."""
    DOCUMENT = "document"
    BINARY = "binary"


def _value(entry: Any, default: Any = None) -> Any:
    """Unwrap a SnapLogic {"value": ...} property."""
    if isinstance(entry, dict):
        return entry.get("value", default)
    return default


class View(BaseModel):
    """Named input or output port of a snap."""
    name: str
    label: str | None = None
    view_type: ViewType | None = None

    @classmethod
    def from_property(cls, name: str, entry: Any) -> "View":
        view_type = _value(entry.get("view_type")) if isinstance(entry, dict) else None
        return cls(
            name=name,
            label=_value(entry.get("label")) if isinstance(entry, dict) else None,
            view_type=view_type if view_type in {t.value for t in ViewType} else None,
        )

    def to_property(self) -> dict[str, Any]:
        return {
            "label": {"value": self.label or self.name},
            "view_type": {"value": (self.view_type or ViewType.DOCUMENT).value},
        }


class Node(BaseModel):
    """Snap instance inside a pipeline's snap_map."""
    instance_id: str
    class_id: str | None = None
    class_version: int | None = None
    instance_version: int | None = None
    label: str | None = None
    inputs: dict[str, View] = Field(default_factory=dict)
    outputs: dict[str, View] = Field(default_factory=dict)

    @property
    def category(self) -> str | None:
        """Snap pack category, e.g. 'transform' for com-snaplogic-snaps-transform-*."""
        if not self.class_id or not self.class_id.startswith("com-snaplogic-snaps-"):
            return None
        rest = self.class_id[len("com-snaplogic-snaps-"):]
        return rest.split("-", 1)[0] or None

    @classmethod
    def from_entry(cls, key: str, entry: dict[str, Any]) -> "Node":
        """Build a snap from a snap_map entry, tolerating partial entries."""
        property_map = entry.get("property_map")
        if not isinstance(property_map, dict):
            property_map = {}
        info = property_map.get("info") if isinstance(property_map.get("info"), dict) else {}

        def views(section: Any) -> dict[str, View]:
            if not isinstance(section, dict):
                return {}
            return {name: View.from_property(name, value) for name, value in section.items()}

        class_id = entry.get("class_id")
        class_version = entry.get("class_version")
        instance_version = entry.get("instance_version")
        return cls(
            instance_id=key,
            class_id=class_id if isinstance(class_id, str) else None,
            class_version=class_version if isinstance(class_version, int) else None,
            instance_version=instance_version if isinstance(instance_version, int) else None,
            label=_value(info.get("label")),
            inputs=views(property_map.get("input")),
            outputs=views(property_map.get("output")),
        )

    def to_entry(self) -> dict[str, Any]:
        """Serialize into a snap_map entry."""
        return {
            "class_id": self.class_id,
            "class_version": self.class_version or 1,
            "instance_id": self.instance_id,
            "instance_version": self.instance_version or 1,
            "property_map": {
                "info": {"label": {"value": self.label or self.instance_id}},
                "input": {name: view.to_property() for name, view in self.inputs.items()},
                "output": {name: view.to_property() for name, view in self.outputs.items()},
                "settings": {},
                "view_serial": 100,
            },
        }


class Link(BaseModel):
    """Directed connection between two snap views."""
    link_id: str
    src_id: str
    src_view_id: str = "output0"
    dst_id: str
    dst_view_id: str = "input0"

    def to_entry(self) -> dict[str, str]:
        """Serialize into a link_map entry."""
        return {
            "dst_id": self.dst_id,
            "dst_view_id": self.dst_view_id,
            "src_id": self.src_id,
            "src_view_id": self.src_view_id,
        }
