"""Pydantic data models for SnapLogic pipeline documents."""

from slplint.models.pipeline import Link, Node, View, ViewType

__all__ = [
    "Node",
    "View",
    "ViewType",
    "Link",
]
