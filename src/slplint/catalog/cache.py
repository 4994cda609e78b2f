"""In-memory snap catalog with category and token indexes."""

import logging
import re
import time
from dataclasses import asdict, dataclass
from typing import Any

logger = logging.getLogger(__name__)

_CATEGORY_RE = re.compile(r"com-snaplogic-snaps-([^-]+)")
_TOKEN_SPLIT_RE = re.compile(r"[\s\-_.]+")


def _value(entry: Any) -> Any:
    return entry.get("value") if isinstance(entry, dict) else None


@dataclass(frozen=True)
class CatalogEntry:
    """Compact catalog record: only the fields lookups need."""
    class_id: str
    name: str
    category: str
    description: str
    version: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class SchemaCache:
    """Snap catalog keyed by class_id, refreshed after a time-to-live."""

    def __init__(self, ttl_seconds: float = 24 * 60 * 60, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self.catalog: dict[str, CatalogEntry] = {}
        self.by_category: dict[str, set[str]] = {}
        self.search_index: dict[str, set[str]] = {}
        self.last_fetch: float | None = None

    def needs_refresh(self) -> bool:
        if self.last_fetch is None:
            return True
        return self._clock() - self.last_fetch > self.ttl_seconds

    def process_catalog(self, api_response: dict[str, Any]) -> int:
        """Index a catalog API payload, replacing the current contents.

        Args:
            api_response: Catalog response, with or without the response_map wrapper

        Returns:
            Number of snaps indexed
        """
        self.catalog.clear()
        self.by_category.clear()
        self.search_index.clear()

        snap_data = api_response.get("response_map", api_response)
        if not isinstance(snap_data, dict):
            snap_data = {}

        for class_id, schema in snap_data.items():
            if not isinstance(schema, dict) or not schema.get("class_map"):
                continue

            name = class_id
            description = schema.get("description") or ""
            class_map = schema["class_map"]
            info = class_map.get("info") if isinstance(class_map, dict) else None
            if isinstance(info, dict):
                name = _value(info.get("label")) or name
                description = _value(info.get("notes")) or description

            match = _CATEGORY_RE.search(class_id)
            category = match.group(1) if match else "unknown"

            entry = CatalogEntry(
                class_id=class_id,
                name=name,
                category=category,
                description=description,
                version=schema.get("class_version") or 1,
            )
            self.catalog[class_id] = entry
            self.by_category.setdefault(category, set()).add(class_id)
            self._index_for_search(entry)

        self.last_fetch = self._clock()
        logger.info(f"Indexed {len(self.catalog)} snaps in {len(self.by_category)} categories")
        return len(self.catalog)

    def _index_for_search(self, entry: CatalogEntry) -> None:
        for token in self.tokenize(f"{entry.name} {entry.description}"):
            self.search_index.setdefault(token, set()).add(entry.class_id)

    @staticmethod
    def tokenize(text: str) -> list[str]:
        return [token.lower() for token in _TOKEN_SPLIT_RE.split(text) if len(token) > 2]

    def search(self, query: str, category: str | None = None) -> list[CatalogEntry]:
        """Contains-match search ranked by how well the query matches.

        Exact word matches score 5, word prefixes 3, other substrings 1;
        hits in the class_id or the display name add a point each.
        """
        query = query.lower().strip()
        if len(query) < 2:
            return []

        scores: dict[str, int] = {}
        for class_id, entry in self.catalog.items():
            if category and entry.category != category.lower():
                continue

            text = f"{class_id} {entry.name} {entry.description}".lower()
            if query not in text:
                continue

            words = [w for w in _TOKEN_SPLIT_RE.split(text) if w]
            if query in words:
                score = 5
            elif any(w.startswith(query) for w in words):
                score = 3
            else:
                score = 1
            if query in class_id.lower():
                score += 1
            if query in entry.name.lower():
                score += 1
            scores[class_id] = score

        ranked = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
        return [self.catalog[class_id] for class_id, _ in ranked]

    def suggest(self, text: str, limit: int = 3) -> list[CatalogEntry]:
        """Snaps sharing the most indexed tokens with text."""
        hits: dict[str, int] = {}
        for token in self.tokenize(text.replace("com-snaplogic-snaps-", " ")):
            for class_id in self.search_index.get(token, ()):
                hits[class_id] = hits.get(class_id, 0) + 1
        ranked = sorted(hits.items(), key=lambda item: (-item[1], item[0]))
        return [self.catalog[class_id] for class_id, _ in ranked[:limit]]

    def categories(self) -> list[dict[str, Any]]:
        return [
            {"name": name, "count": len(class_ids)}
            for name, class_ids in sorted(self.by_category.items())
        ]

    def get(self, class_id: str) -> CatalogEntry | None:
        return self.catalog.get(class_id)

    def clear(self) -> None:
        self.catalog.clear()
        self.by_category.clear()
        self.search_index.clear()
        self.last_fetch = None
