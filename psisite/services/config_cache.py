"""
Process-wide cache of the config store.

The full entry list is fetched once and served from memory until a write
invalidates it. Forms whose values are cheap to reconstruct splice the
saved entry in place (``patch``) so the next page render shows the new
value without another round trip.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from psisite.services import config_store

logger = logging.getLogger(__name__)


class ConfigCache:
    """Snapshot of every config entry as ``to_dict()`` payloads."""

    def __init__(self) -> None:
        self._entries: list[dict[str, Any]] | None = None

    @property
    def is_loaded(self) -> bool:
        return self._entries is not None

    async def get_all(self, db: AsyncSession) -> list[dict[str, Any]]:
        if self._entries is None:
            entries = await config_store.list_entries(db)
            self._entries = [entry.to_dict() for entry in entries]
            logger.debug("Loaded %d config entries", len(self._entries))
        return list(self._entries)

    async def get_map(self, db: AsyncSession) -> dict[str, Any]:
        """All entries as {key: value}."""
        return {entry["key"]: entry["value"] for entry in await self.get_all(db)}

    async def get_value(self, db: AsyncSession, key: str, default: Any = None) -> Any:
        return (await self.get_map(db)).get(key, default)

    def invalidate(self) -> None:
        self._entries = None

    def patch(self, key: str, value: Any) -> None:
        """Replace the cached entry for ``key`` or append a new one.

        Does nothing before the first fetch: the next ``get_all`` reads the
        stored value anyway.
        """
        if self._entries is None:
            return
        updated_at = datetime.now(timezone.utc).isoformat()
        for entry in self._entries:
            if entry["key"] == key:
                entry["value"] = value
                entry["updatedAt"] = updated_at
                return
        self._entries.append({"id": None, "key": key, "value": value, "updatedAt": updated_at})

    def discard(self, key: str) -> None:
        if self._entries is not None:
            self._entries = [entry for entry in self._entries if entry["key"] != key]


config_cache = ConfigCache()
