"""
Public pages: the single-page site and robots.txt.
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from psisite.deps import CurrentAdminOptional, DBSession
from psisite.models.content import FaqItem, PhotoCarouselItem, Service, Specialty, Testimonial
from psisite.routers.content import list_active
from psisite.services import page_settings
from psisite.site import load_site_context
from psisite.templates_config import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["public"])

ROBOTS_ALLOW = "User-agent: *\nAllow: /\nDisallow: /admin\n"
ROBOTS_DENY = "User-agent: *\nDisallow: /\n"


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, db: DBSession, admin: CurrentAdminOptional):
    site = await load_site_context(db)

    # Admins keep seeing the real page so they can check their edits
    if site.maintenance.is_enabled and admin is None:
        return templates.TemplateResponse(
            request,
            "maintenance.html",
            {"site": site},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            headers={"Retry-After": "3600"},
        )

    footer = await page_settings.get_footer_settings(db)
    contact = await page_settings.get_contact_settings(db)
    return templates.TemplateResponse(
        request,
        "home.html",
        {
            "site": site,
            "admin": admin,
            "testimonials": await list_active(db, Testimonial),
            "faq_items": await list_active(db, FaqItem),
            "services": await list_active(db, Service),
            "specialties": await list_active(db, Specialty),
            "photos": await list_active(db, PhotoCarouselItem),
            "footer": footer,
            "contact": contact,
            "contact_items": page_settings.active_items(contact.contact_items),
            "footer_buttons": page_settings.active_items(footer.contact_buttons),
            "certifications": page_settings.active_items(footer.certification_items),
            "trust_seals": page_settings.active_items(footer.trust_seals),
        },
    )


@router.get("/robots.txt", response_class=PlainTextResponse)
async def robots_txt(db: DBSession):
    """Indexing follows ``marketing_pixels.enableGoogleIndexing``; allowed unless turned off."""
    try:
        site = await load_site_context(db)
    except SQLAlchemyError:
        logger.warning("Config store unavailable; serving permissive robots.txt", exc_info=True)
        return ROBOTS_ALLOW
    return ROBOTS_ALLOW if site.pixels.enable_google_indexing else ROBOTS_DENY
