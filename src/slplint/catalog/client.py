"""HTTP client for the SnapLogic snap catalog."""

import json
import logging
from pathlib import Path
from typing import Any

import requests

from slplint.config import CatalogConfig
from slplint.exceptions import CatalogError
from .cache import CatalogEntry, SchemaCache
from .checks import NodeCheck, check_node_config

logger = logging.getLogger(__name__)

CATALOG_PATH = "/api/1/rest/admin/snappack/catalog/snaps"


class CatalogClient:
    """Fetches the snap catalog and answers lookups from a SchemaCache."""

    def __init__(self, config: CatalogConfig, session: requests.Session | None = None,
                 cache: SchemaCache | None = None):
        self.config = config
        self.session = session or requests.Session()
        if config.username:
            self.session.auth = (config.username, config.password)
        self.cache = cache or SchemaCache(ttl_seconds=config.ttl_seconds)

    @property
    def catalog_url(self) -> str:
        return f"{self.config.base_url}{CATALOG_PATH}"

    def fetch_catalog(self) -> int:
        """Load the catalog into the cache.

        Reads the configured cache file when one is set, otherwise asks
        the catalog API.

        Returns:
            Number of snaps indexed

        Raises:
            CatalogError: If the catalog cannot be retrieved
        """
        if self.config.cache_file:
            return self.cache.process_catalog(self._load_cache_file(Path(self.config.cache_file)))

        logger.info(f"Fetching snap catalog from {self.config.base_url}")
        try:
            response = self.session.get(
                self.catalog_url,
                params={"org_path": f"/{self.config.org}", "level": "detail"},
                headers={"Accept": "application/json"},
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            raise CatalogError(f"Failed to reach catalog API: {e}") from e

        if not response.ok:
            raise CatalogError(f"API error: {response.status_code} {response.reason}")

        try:
            payload = response.json()
        except ValueError as e:
            raise CatalogError(f"Catalog API returned invalid JSON: {e}") from e
        if not isinstance(payload, dict):
            raise CatalogError("Catalog API returned an unexpected payload")

        return self.cache.process_catalog(payload)

    def _load_cache_file(self, path: Path) -> dict[str, Any]:
        logger.info(f"Loading snap catalog from {path}")
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise CatalogError(f"Catalog cache file not found: {path}") from e
        except json.JSONDecodeError as e:
            raise CatalogError(f"Invalid JSON in catalog cache file {path}: {e}") from e
        if not isinstance(payload, dict):
            raise CatalogError(f"Catalog cache file {path} does not hold an object")
        return payload

    def ensure_catalog(self) -> SchemaCache:
        if self.cache.needs_refresh():
            self.fetch_catalog()
        return self.cache

    def search(self, query: str, category: str | None = None) -> list[CatalogEntry]:
        return self.ensure_catalog().search(query, category)

    def categories(self) -> list[dict[str, Any]]:
        return self.ensure_catalog().categories()

    def describe(self, class_id: str) -> dict[str, Any]:
        """Basic configuration skeleton for a snap type.

        Raises:
            CatalogError: If the snap is not in the catalog
        """
        entry = self.ensure_catalog().get(class_id)
        if entry is None:
            raise CatalogError(f"Snap not found: {class_id}")

        return {
            "class_id": entry.class_id,
            "class_version": entry.version,
            "description": entry.description,
            "property_map": {
                "settings": {
                    "execution_mode": {"value": "Validate & Execute"},
                },
                "info": {
                    "label": {"value": entry.name},
                },
            },
        }

    def check_node(self, config: dict[str, Any]) -> NodeCheck:
        return check_node_config(config, self.ensure_catalog())
