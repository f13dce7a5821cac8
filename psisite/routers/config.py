"""
JSON API for the key/value config store.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, StringConstraints

from psisite.config_values import ConfigValueError, validate_config_value
from psisite.deps import CurrentAdmin, DBSession
from psisite.models.site_config import ConfigKeys
from psisite.services import config_store
from psisite.services.config_cache import config_cache
from psisite.services.section_styles import (
    SCHEDULING_KEYWORDS,
    SCHEDULING_MARKER_CLASSES,
    SchedulingButtonStyle,
    build_section_styles,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["config"])


class ConfigEntryIn(BaseModel):
    key: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
    value: Any


@router.get("/admin/config")
async def list_config(db: DBSession, admin: CurrentAdmin):
    """Every entry of the store."""
    return [entry.to_dict() for entry in await config_store.list_entries(db)]


@router.post("/admin/config")
async def save_config(entry: ConfigEntryIn, db: DBSession, admin: CurrentAdmin):
    """Upsert one entry; known keys are validated against their value model."""
    if entry.value is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Dados inválidos")
    try:
        value = validate_config_value(entry.key, entry.value)
    except ConfigValueError as exc:
        logger.info("Rejected config write for %s: %s", exc.key, exc.errors)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Dados inválidos", "fields": exc.errors},
        ) from exc

    saved = await config_store.upsert_entry(db, entry.key, value)
    await db.commit()
    config_cache.invalidate()
    return saved.to_dict()


@router.delete("/admin/config/{key}")
async def delete_config(key: str, db: DBSession, admin: CurrentAdmin):
    deleted = await config_store.delete_entry(db, key)
    await db.commit()
    config_cache.invalidate()
    return {"success": True, "deleted": deleted}


@router.get("/config")
async def public_config(db: DBSession):
    """Public read of the whole store (favicon resolution, client-side readers)."""
    return await config_cache.get_all(db)


@router.get("/maintenance-check")
async def maintenance_check(db: DBSession):
    config = await config_cache.get_map(db)
    return {
        "maintenance": config.get(ConfigKeys.MAINTENANCE_MODE) or {"isEnabled": False},
        "general": config.get(ConfigKeys.GENERAL_INFO) or {},
    }


@router.get("/section-styles")
async def section_styles(db: DBSession):
    """Computed background overrides for each configured section."""
    config = await config_cache.get_map(db)
    styles = build_section_styles(config.get(ConfigKeys.SECTION_COLORS))
    scheduling = SchedulingButtonStyle.from_general_info(config.get(ConfigKeys.GENERAL_INFO))
    return {
        "sections": [style.to_dict() for style in styles.values()],
        "schedulingButton": {
            "color": scheduling.color,
            "markerClasses": sorted(SCHEDULING_MARKER_CLASSES),
            "keywords": list(SCHEDULING_KEYWORDS),
        },
    }
