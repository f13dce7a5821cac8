"""
Uploads: favicon set, hero photo and testimonial photos.
"""

import logging

from fastapi import APIRouter, File, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from psisite.deps import CurrentAdmin, DBSession
from psisite.models.content import Testimonial
from psisite.models.site_config import ConfigKeys
from psisite.services import config_store, images
from psisite.services.config_cache import config_cache
from psisite.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["uploads"])


async def read_image_upload(upload: UploadFile) -> bytes:
    if upload.content_type and not upload.content_type.startswith("image/"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Apenas imagens são permitidas")
    # Read one byte past the limit so oversize files are detected without buffering them whole
    data = await upload.read(settings.upload_max_size_bytes + 1)
    if len(data) > settings.upload_max_size_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Arquivo maior que {settings.upload_max_size_mb} MB",
        )
    return data


async def store_favicon(db: AsyncSession, data: bytes) -> list[str]:
    """Write the favicon set and point ``site_icon`` at it."""
    try:
        urls = await run_in_threadpool(images.save_favicon, data)
    except images.ImageUploadError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    await config_store.upsert_entry(db, ConfigKeys.SITE_ICON, {"iconPath": urls[0]})
    await db.commit()
    config_cache.invalidate()
    return urls


async def clear_favicon(db: AsyncSession) -> None:
    await run_in_threadpool(images.remove_favicon)
    await config_store.delete_entry(db, ConfigKeys.SITE_ICON)
    await db.commit()
    config_cache.invalidate()


@router.post("/upload/favicon")
async def upload_favicon(
    db: DBSession,
    admin: CurrentAdmin,
    image: UploadFile = File(...),
):
    urls = await store_favicon(db, await read_image_upload(image))
    return {
        "success": True,
        "message": "Favicon atualizado com sucesso",
        "files": [url.rsplit("/", 1)[-1] for url in urls],
        "iconPath": urls[0],
    }


@router.delete("/upload/favicon")
async def delete_favicon(db: DBSession, admin: CurrentAdmin):
    await clear_favicon(db)
    return {"success": True, "message": "Favicon restaurado para o padrão"}


@router.post("/upload/hero")
async def upload_hero_image(
    db: DBSession,
    admin: CurrentAdmin,
    image: UploadFile = File(...),
):
    data = await read_image_upload(image)
    try:
        url = await run_in_threadpool(images.save_hero_image, data)
    except images.ImageUploadError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    previous = await config_store.get_entry(db, ConfigKeys.HERO_IMAGE)
    old_path = previous.value.get("path") if previous and isinstance(previous.value, dict) else None
    await config_store.upsert_entry(db, ConfigKeys.HERO_IMAGE, {"path": url})
    await db.commit()
    config_cache.invalidate()

    if old_path and old_path != url:
        await run_in_threadpool(images.remove_upload, old_path)
    return {"success": True, "path": url}


@router.post("/testimonials/{testimonial_id}/image")
async def upload_testimonial_photo(
    testimonial_id: int,
    db: DBSession,
    admin: CurrentAdmin,
    image: UploadFile = File(...),
):
    testimonial = await db.get(Testimonial, testimonial_id)
    if testimonial is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item não encontrado")

    data = await read_image_upload(image)
    try:
        url = await run_in_threadpool(images.save_testimonial_photo, data)
    except images.ImageUploadError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    old_photo = testimonial.photo
    testimonial.photo = url
    await db.commit()
    logger.info("Photo of testimonial #%s set to %s", testimonial_id, url)

    if old_photo and old_photo != url:
        await run_in_threadpool(images.remove_upload, old_photo)
    return {"imageUrl": url}
