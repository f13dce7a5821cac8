"""
Admin panel: config forms, section colors, about credentials, section
visibility/order and favicon.

Every page works as a plain HTML form post; HTMX requests get the updated
form fragment plus a toast instead of a redirect.
"""

import logging
from typing import Any

from fastapi import APIRouter, File, HTTPException, Request, UploadFile, status
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from psisite import config_values as cv
from psisite.admin_forms import ADMIN_FORMS, AdminForm, CacheStrategy, get_form
from psisite.deps import CurrentAdmin, DBSession, is_htmx
from psisite.models.site_config import ConfigKeys
from psisite.routers.uploads import clear_favicon, read_image_upload, store_favicon
from psisite.services import config_store
from psisite.services.config_cache import config_cache
from psisite.services.gradient_text import BADGE_GRADIENTS
from psisite.services.section_styles import (
    COLOR_PRESET_GROUPS,
    COLOR_PRESETS,
    GRADIENT_DIRECTIONS,
    SECTION_SELECTORS,
)
from psisite.services.visibility import PAGE_BLOCKS, VISIBILITY_SECTIONS, block_position, resolve_visibility
from psisite.settings import settings
from psisite.site import load_site_context
from psisite.templates_config import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

SAVE_ERROR = "Não foi possível salvar. Tente novamente."

SECTION_LABELS = {
    "hero": "Início",
    "about": "Sobre",
    "specialties": "Especialidades",
    "gallery": "Galeria",
    "services": "Serviços",
    "testimonials": "Depoimentos",
    "faq": "Perguntas frequentes",
    "contact": "Contato",
    "inspirational": "Frase inspiradora",
}


def _toast(kind: str, message: str) -> dict[str, str]:
    return {"kind": kind, "message": message}


async def _save(db: AsyncSession, values: dict[str, Any]) -> bool:
    """Upsert every key in one transaction; on a store failure roll back and report False."""
    try:
        for key, value in values.items():
            await config_store.upsert_entry(db, key, value)
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to save config keys %s", ", ".join(values))
        return False
    return True


@router.get("", response_class=HTMLResponse)
async def dashboard(request: Request, db: DBSession, admin: CurrentAdmin):
    entries = {entry.key: entry for entry in await config_store.list_entries(db)}
    return templates.TemplateResponse(
        request,
        "admin/dashboard.html",
        {
            "admin": admin,
            "forms": list(ADMIN_FORMS.values()),
            "entries": entries,
            "site": await load_site_context(db),
        },
    )


# --- Config forms ----------------------------------------------------------


def _get_form_or_404(slug: str) -> AdminForm:
    form = get_form(slug)
    if form is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Formulário não encontrado")
    return form


def _render_form(
    request: Request,
    form: AdminForm,
    values: dict[str, Any],
    errors: dict[str, str] | None = None,
    toast: dict[str, str] | None = None,
    status_code: int = 200,
):
    template = "admin/partials/config_form.html" if is_htmx(request) else "admin/form.html"
    return templates.TemplateResponse(
        request,
        template,
        {
            "form": form,
            "values": values,
            "errors": errors or {},
            "toast": toast,
            "gradients": BADGE_GRADIENTS,
        },
        status_code=status_code,
    )


@router.get("/forms/{slug}", response_class=HTMLResponse)
async def edit_form(request: Request, slug: str, db: DBSession, admin: CurrentAdmin, saved: bool = False):
    form = _get_form_or_404(slug)
    entry = await config_store.get_entry(db, form.key)
    toast = _toast("success", "Alterações salvas com sucesso!") if saved else None
    return _render_form(request, form, form.form_values(entry.value if entry else None), toast=toast)


@router.post("/forms/{slug}", response_class=HTMLResponse)
async def submit_form(request: Request, slug: str, db: DBSession, admin: CurrentAdmin):
    form = _get_form_or_404(slug)
    submitted = form.parse_form(dict(await request.form()))

    try:
        value = form.model.model_validate(submitted).to_value()
    except ValidationError as exc:
        # Invalid input never reaches the store
        return _render_form(
            request,
            form,
            submitted,
            errors=cv.field_errors(exc),
            toast=_toast("error", "Corrija os campos destacados."),
            status_code=200 if is_htmx(request) else status.HTTP_400_BAD_REQUEST,
        )

    if not await _save(db, {form.key: value}):
        return _render_form(
            request,
            form,
            submitted,
            toast=_toast("error", SAVE_ERROR),
            status_code=200 if is_htmx(request) else status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    if form.cache_strategy is CacheStrategy.OPTIMISTIC:
        config_cache.patch(form.key, value)
    else:
        config_cache.invalidate()
    logger.info("Admin %s saved %s", admin.username, form.key)

    if is_htmx(request):
        return _render_form(request, form, value, toast=_toast("success", "Alterações salvas com sucesso!"))
    return RedirectResponse(url=f"/admin/forms/{slug}?saved=1", status_code=status.HTTP_303_SEE_OTHER)


# --- Section colors --------------------------------------------------------


def _current_section_colors(raw: Any) -> dict[str, dict[str, Any]]:
    """Stored overrides that still parse; anything else is dropped on the next write."""
    if not isinstance(raw, dict):
        return {}
    colors = {}
    for section_id, spec in raw.items():
        try:
            colors[section_id] = cv.SectionColorSpec.model_validate(spec).to_value()
        except ValidationError:
            logger.warning("Dropping invalid stored color spec for %s", section_id)
    return colors


def _spec_from_form(form: dict[str, Any]) -> dict[str, Any]:
    def text(name: str) -> str | None:
        value = str(form.get(name, "")).strip()
        return value or None

    def number(name: str) -> float | None:
        value = text(name)
        return float(value) if value is not None else None

    spec: dict[str, Any] = {
        "backgroundType": text("backgroundType") or "solid",
        "backgroundColor": text("backgroundColor"),
        "gradientDirection": text("gradientDirection"),
        "overlayColor": text("overlayColor"),
    }
    start, end = text("gradientStart"), text("gradientEnd")
    if start and end:
        spec["gradientColors"] = [start, end]
    try:
        spec["opacity"] = number("opacity")
        spec["overlayOpacity"] = number("overlayOpacity")
    except ValueError:
        spec["opacity"] = spec["overlayOpacity"] = "invalid"
    return {k: v for k, v in spec.items() if v is not None}


async def _render_section_colors(
    request: Request,
    db: AsyncSession,
    toast: dict[str, str] | None = None,
    errors: dict[str, dict[str, str]] | None = None,
    status_code: int = 200,
):
    entry = await config_store.get_entry(db, ConfigKeys.SECTION_COLORS)
    return templates.TemplateResponse(
        request,
        "admin/section_colors.html",
        {
            "sections": list(SECTION_SELECTORS),
            "labels": SECTION_LABELS,
            "colors": _current_section_colors(entry.value if entry else None),
            "directions": GRADIENT_DIRECTIONS,
            "preset_groups": COLOR_PRESET_GROUPS,
            "errors": errors or {},
            "toast": toast,
        },
        status_code=status_code,
    )


@router.get("/section-colors", response_class=HTMLResponse)
async def section_colors_page(request: Request, db: DBSession, admin: CurrentAdmin, saved: bool = False):
    toast = _toast("success", "Cores atualizadas!") if saved else None
    return await _render_section_colors(request, db, toast=toast)


@router.post("/section-colors/{section_id}", response_class=HTMLResponse)
async def save_section_colors(request: Request, section_id: str, db: DBSession, admin: CurrentAdmin):
    if section_id not in SECTION_SELECTORS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Seção desconhecida")

    try:
        spec = cv.SectionColorSpec.model_validate(_spec_from_form(dict(await request.form())))
    except ValidationError as exc:
        return await _render_section_colors(
            request,
            db,
            toast=_toast("error", "Corrija os campos destacados."),
            errors={section_id: cv.field_errors(exc)},
            status_code=200 if is_htmx(request) else status.HTTP_400_BAD_REQUEST,
        )

    entry = await config_store.get_entry(db, ConfigKeys.SECTION_COLORS)
    colors = _current_section_colors(entry.value if entry else None)
    colors[section_id] = spec.to_value()
    return await _finish_section_colors(request, db, colors)


@router.post("/section-colors/{section_id}/preset/{preset_id}", response_class=HTMLResponse)
async def apply_color_preset(request: Request, section_id: str, preset_id: str, db: DBSession, admin: CurrentAdmin):
    """Replace a section's background with a preset, keeping its overlay."""
    preset = COLOR_PRESETS.get(preset_id)
    if section_id not in SECTION_SELECTORS or preset is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Seção ou modelo desconhecido")

    entry = await config_store.get_entry(db, ConfigKeys.SECTION_COLORS)
    colors = _current_section_colors(entry.value if entry else None)
    overlay = {
        name: value for name, value in colors.get(section_id, {}).items()
        if name in ("overlayColor", "overlayOpacity")
    }
    colors[section_id] = cv.SectionColorSpec.model_validate({**overlay, **preset.spec}).to_value()
    return await _finish_section_colors(request, db, colors)


@router.post("/section-colors/{section_id}/reset", response_class=HTMLResponse)
async def reset_section_colors(request: Request, section_id: str, db: DBSession, admin: CurrentAdmin):
    entry = await config_store.get_entry(db, ConfigKeys.SECTION_COLORS)
    colors = _current_section_colors(entry.value if entry else None)
    colors.pop(section_id, None)
    return await _finish_section_colors(request, db, colors)


async def _finish_section_colors(request: Request, db: AsyncSession, colors: dict[str, Any]):
    if not await _save(db, {ConfigKeys.SECTION_COLORS: colors}):
        return await _render_section_colors(
            request,
            db,
            toast=_toast("error", SAVE_ERROR),
            status_code=200 if is_htmx(request) else status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    config_cache.invalidate()
    if is_htmx(request):
        return await _render_section_colors(request, db, toast=_toast("success", "Cores atualizadas!"))
    return RedirectResponse(url="/admin/section-colors?saved=1", status_code=status.HTTP_303_SEE_OTHER)


# --- About credentials -----------------------------------------------------
#
# The whole ordered list lives under one key; each card is edited in place.


async def _stored_credentials(db: AsyncSession) -> cv.AboutCredentials:
    entry = await config_store.get_entry(db, ConfigKeys.ABOUT_CREDENTIALS)
    return cv.load_credentials(entry.value if entry else None)


def _credential_from_form(form: dict[str, Any], credential_id: int, default_order: int) -> dict[str, Any]:
    return {
        "id": credential_id,
        "title": form.get("title", ""),
        "subtitle": form.get("subtitle", ""),
        "gradient": str(form.get("gradient", "")).strip() or "from-pink-50 to-purple-50",
        "isActive": form.get("isActive") == "on",
        "order": str(form.get("order", "")).strip() or default_order,
    }


async def _render_credentials(
    request: Request,
    db: AsyncSession,
    toast: dict[str, str] | None = None,
    errors: dict[int, dict[str, str]] | None = None,
    status_code: int = 200,
):
    credentials = await _stored_credentials(db)
    return templates.TemplateResponse(
        request,
        "admin/credentials.html",
        {
            "credentials": sorted(credentials.root, key=lambda c: c.order),
            "errors": errors or {},
            "toast": toast,
        },
        status_code=status_code,
    )


async def _finish_credentials(request: Request, db: AsyncSession, credentials: cv.AboutCredentials):
    if not await _save(db, {ConfigKeys.ABOUT_CREDENTIALS: credentials.to_value()}):
        return await _render_credentials(
            request,
            db,
            toast=_toast("error", SAVE_ERROR),
            status_code=200 if is_htmx(request) else status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    config_cache.invalidate()
    if is_htmx(request):
        return await _render_credentials(request, db, toast=_toast("success", "Credenciais atualizadas com sucesso!"))
    return RedirectResponse(url="/admin/credentials?saved=1", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/credentials", response_class=HTMLResponse)
async def credentials_page(request: Request, db: DBSession, admin: CurrentAdmin, saved: bool = False):
    toast = _toast("success", "Credenciais atualizadas com sucesso!") if saved else None
    return await _render_credentials(request, db, toast=toast)


@router.post("/credentials", response_class=HTMLResponse)
async def add_credential(request: Request, db: DBSession, admin: CurrentAdmin):
    return await _store_credential(request, db, None)


@router.post("/credentials/{credential_id}", response_class=HTMLResponse)
async def update_credential(request: Request, credential_id: int, db: DBSession, admin: CurrentAdmin):
    return await _store_credential(request, db, credential_id)


async def _store_credential(request: Request, db: AsyncSession, credential_id: int | None):
    credentials = await _stored_credentials(db)
    items = list(credentials.root)
    if credential_id is not None and not any(c.id == credential_id for c in items):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Credencial não encontrada")

    form = dict(await request.form())
    target_id = credential_id if credential_id is not None else credentials.next_id()
    try:
        credential = cv.Credential.model_validate(_credential_from_form(form, target_id, len(items)))
    except ValidationError as exc:
        return await _render_credentials(
            request,
            db,
            toast=_toast("error", "Corrija os campos destacados."),
            errors={credential_id or 0: cv.field_errors(exc)},
            status_code=200 if is_htmx(request) else status.HTTP_400_BAD_REQUEST,
        )

    if credential_id is None:
        items.append(credential)
    else:
        items = [credential if c.id == credential_id else c for c in items]
    return await _finish_credentials(request, db, cv.AboutCredentials(items))


@router.post("/credentials/{credential_id}/delete", response_class=HTMLResponse)
async def delete_credential(request: Request, credential_id: int, db: DBSession, admin: CurrentAdmin):
    credentials = await _stored_credentials(db)
    remaining = [c for c in credentials.root if c.id != credential_id]
    if len(remaining) == len(credentials.root):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Credencial não encontrada")
    return await _finish_credentials(request, db, cv.AboutCredentials(remaining))


# --- Section visibility and order -----------------------------------------


@router.get("/sections", response_class=HTMLResponse)
async def sections_page(request: Request, db: DBSession, admin: CurrentAdmin, saved: bool = False):
    config = await config_cache.get_map(db)
    order = config.get(ConfigKeys.SECTION_ORDER)
    order = order if isinstance(order, dict) else {}
    return templates.TemplateResponse(
        request,
        "admin/sections.html",
        {
            "sections": VISIBILITY_SECTIONS,
            "labels": SECTION_LABELS,
            "visibility": resolve_visibility(config.get(ConfigKeys.SECTION_VISIBILITY)),
            "blocks": PAGE_BLOCKS,
            "order": {block.key: block_position(block, order) for block in PAGE_BLOCKS},
            "toast": _toast("success", "Seções atualizadas!") if saved else None,
        },
    )


@router.post("/sections", response_class=HTMLResponse)
async def save_sections(request: Request, db: DBSession, admin: CurrentAdmin):
    form = await request.form()
    visibility = {section: form.get(f"visible_{section}") == "on" for section in VISIBILITY_SECTIONS}

    order: dict[str, float] = {}
    for block in PAGE_BLOCKS:
        raw = str(form.get(f"order_{block.key}", "")).strip()
        if not raw:
            continue
        try:
            order[block.key] = float(raw)
        except ValueError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Ordem inválida para {block.key}")

    saved = await _save(db, {
        ConfigKeys.SECTION_VISIBILITY: cv.SectionVisibility(visibility).to_value(),
        ConfigKeys.SECTION_ORDER: cv.SectionOrder(order).to_value(),
    })
    if not saved:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=SAVE_ERROR)

    config_cache.invalidate()
    if is_htmx(request):
        return templates.TemplateResponse(
            request, "partials/toast.html", {"toast": _toast("success", "Seções atualizadas!")}
        )
    return RedirectResponse(url="/admin/sections?saved=1", status_code=status.HTTP_303_SEE_OTHER)


# --- Favicon ---------------------------------------------------------------


@router.get("/favicon", response_class=HTMLResponse)
async def favicon_page(request: Request, db: DBSession, admin: CurrentAdmin, saved: bool = False):
    site = await load_site_context(db)
    return templates.TemplateResponse(
        request,
        "admin/favicon.html",
        {
            "site": site,
            "max_size_mb": settings.upload_max_size_mb,
            "toast": _toast("success", "Favicon atualizado!") if saved else None,
        },
    )


@router.post("/favicon")
async def favicon_submit(db: DBSession, admin: CurrentAdmin, image: UploadFile = File(...)):
    await store_favicon(db, await read_image_upload(image))
    return RedirectResponse(url="/admin/favicon?saved=1", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/favicon/reset")
async def favicon_reset(db: DBSession, admin: CurrentAdmin):
    await clear_favicon(db)
    return RedirectResponse(url="/admin/favicon?saved=1", status_code=status.HTTP_303_SEE_OTHER)
