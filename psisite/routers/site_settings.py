"""
Footer and contact-block settings API.
"""

from typing import Any

from fastapi import APIRouter, Body, HTTPException, status

from psisite.deps import CurrentAdmin, DBSession
from psisite.services import page_settings

router = APIRouter(prefix="/api", tags=["site-settings"])


def _require_object(updates: Any) -> dict[str, Any]:
    if not isinstance(updates, dict):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Dados inválidos")
    return updates


@router.get("/footer-settings")
async def footer_settings(db: DBSession):
    return (await page_settings.get_footer_settings(db)).to_dict()


@router.put("/admin/footer-settings")
async def update_footer_settings(db: DBSession, admin: CurrentAdmin, updates: Any = Body(...)):
    row = await page_settings.update_footer_settings(db, _require_object(updates))
    await db.commit()
    return row.to_dict()


@router.get("/contact-settings")
async def contact_settings(db: DBSession):
    return (await page_settings.get_contact_settings(db)).to_dict()


@router.put("/admin/contact-settings")
async def update_contact_settings(db: DBSession, admin: CurrentAdmin, updates: Any = Body(...)):
    row = await page_settings.update_contact_settings(db, _require_object(updates))
    await db.commit()
    return row.to_dict()
