"""Snap catalog lookups for authoring and checking snap configurations."""

from .cache import CatalogEntry, SchemaCache
from .checks import NodeCheck, check_node_config, iter_node_configs
from .client import CatalogClient

__all__ = [
    "CatalogClient",
    "CatalogEntry",
    "SchemaCache",
    "NodeCheck",
    "check_node_config",
    "iter_node_configs",
]
