"""
Key/value config store backed by the ``site_config`` table.

Writes replace the whole value under a key; there is no field-level merge,
so concurrent edits of the same key resolve as last write wins.
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from psisite.models.site_config import SiteConfig

logger = logging.getLogger(__name__)


async def list_entries(db: AsyncSession) -> list[SiteConfig]:
    result = await db.execute(select(SiteConfig).order_by(SiteConfig.key))
    return list(result.scalars().all())


async def get_entry(db: AsyncSession, key: str) -> SiteConfig | None:
    result = await db.execute(select(SiteConfig).where(SiteConfig.key == key))
    return result.scalar_one_or_none()


async def upsert_entry(db: AsyncSession, key: str, value: Any) -> SiteConfig:
    """Create the entry on first write, overwrite its value afterwards."""
    entry = await get_entry(db, key)
    if entry is None:
        entry = SiteConfig(key=key, value=value)
        db.add(entry)
        logger.info("Created config key %s", key)
    else:
        entry.value = value
        logger.info("Updated config key %s", key)
    await db.flush()
    await db.refresh(entry)
    return entry


async def delete_entry(db: AsyncSession, key: str) -> bool:
    entry = await get_entry(db, key)
    if entry is None:
        return False
    await db.delete(entry)
    await db.flush()
    logger.info("Deleted config key %s", key)
    return True
