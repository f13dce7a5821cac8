"""
Footer and contact-block settings.

Each is a single row created with the default copy the first time it is
read. Updates replace whole top-level groups (shallow merge).
"""

import copy
import logging
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from psisite.models.page_settings import ContactSettings, FooterSettings

logger = logging.getLogger(__name__)

SettingsRow = TypeVar("SettingsRow", FooterSettings, ContactSettings)

WHATSAPP_LINK = "https://wa.me/5544998362704"
INSTAGRAM_LINK = "https://instagram.com/adriellebenhossi"

DEFAULT_FOOTER: dict[str, Any] = {
    "general_info": {
        "description": "Cuidando da sua saúde mental com carinho e dedicação",
        "showCnpj": True,
        "cnpj": "12.345.678/0001-90",
    },
    "contact_buttons": [
        {
            "id": 1, "type": "whatsapp", "label": "WhatsApp", "icon": "FaWhatsapp",
            "gradient": "from-green-400 to-green-500", "link": WHATSAPP_LINK,
            "isActive": True, "order": 0,
        },
        {
            "id": 2, "type": "instagram", "label": "Instagram", "icon": "FaInstagram",
            "gradient": "from-purple-400 to-pink-500", "link": INSTAGRAM_LINK,
            "isActive": True, "order": 1,
        },
        {
            "id": 3, "type": "linkedin", "label": "LinkedIn", "icon": "FaLinkedin",
            "gradient": "from-blue-500 to-blue-600",
            "link": "https://linkedin.com/in/adrielle-benhossi-75510034a",
            "isActive": True, "order": 2,
        },
    ],
    "certification_items": [
        {
            "id": 1, "title": "Atendimento",
            "items": ["Presencial e Online", "Campo Mourão - PR", "Segunda à Sábado"],
            "additionalInfo": "Atendimento particular<br/>Horários flexíveis",
            "isActive": True, "order": 0,
        },
        {
            "id": 2, "title": "Certificações",
            "items": ["Registrada no Conselho", "Federal de Psicologia", "Sigilo e ética profissional"],
            "additionalInfo": "",
            "isActive": True, "order": 1,
        },
    ],
    "trust_seals": [
        {"id": 1, "label": "CFP", "gradient": "from-blue-500 to-blue-600", "isActive": True, "order": 0},
        {"id": 2, "label": "🔒", "gradient": "from-green-500 to-green-500", "isActive": True, "order": 1},
        {"id": 3, "label": "⚖️", "gradient": "from-purple-500 to-pink-500", "isActive": True, "order": 2},
    ],
    "bottom_info": {
        "copyright": "© 2024 Dra. Adrielle Benhossi • Todos os direitos reservados",
        "certificationText": "Registrada no Conselho Federal de Psicologia<br/>Sigilo e ética profissional",
        "madeWith": "Made with ♥ and ☕ by ∞",
    },
}

DEFAULT_CONTACT: dict[str, Any] = {
    "contact_items": [
        {
            "id": 1, "type": "whatsapp", "title": "WhatsApp", "description": "(44) 998-362-704",
            "icon": "FaWhatsapp", "color": "#25D366", "link": WHATSAPP_LINK,
            "isActive": True, "order": 0,
        },
        {
            "id": 2, "type": "instagram", "title": "Instagram", "description": "@adriellebenhossi",
            "icon": "FaInstagram", "color": "#E4405F", "link": INSTAGRAM_LINK,
            "isActive": True, "order": 1,
        },
        {
            "id": 3, "type": "email", "title": "Email", "description": "escutapsi@adrielle.com.br",
            "icon": "Mail", "color": "#EA4335", "link": "mailto:escutapsi@adrielle.com.br",
            "isActive": True, "order": 2,
        },
    ],
    "schedule_info": {
        "weekdays": "Segunda à Sexta: 8h às 18h",
        "saturday": "Sábado: 8h às 12h",
        "sunday": "Domingo: Fechado",
        "additional_info": "Horários flexíveis disponíveis",
        "isActive": True,
    },
    "location_info": {
        "city": "Campo Mourão, Paraná",
        "maps_link": "https://maps.google.com/search/Campo+Mourão+Paraná",
        "isActive": True,
    },
}

_DEFAULTS: dict[type, dict[str, Any]] = {
    FooterSettings: DEFAULT_FOOTER,
    ContactSettings: DEFAULT_CONTACT,
}


async def _get_or_create(db: AsyncSession, model: type[SettingsRow]) -> SettingsRow:
    result = await db.execute(select(model).order_by(model.id).limit(1))
    row = result.scalar_one_or_none()
    if row is None:
        row = model(**copy.deepcopy(_DEFAULTS[model]))
        db.add(row)
        await db.flush()
        await db.refresh(row)
        logger.info("Created default %s", model.__tablename__)
    return row


async def _update(db: AsyncSession, model: type[SettingsRow], updates: dict[str, Any]) -> SettingsRow:
    row = await _get_or_create(db, model)
    unknown = sorted(set(updates) - set(model.GROUPS))
    if unknown:
        logger.warning("Ignoring unknown %s groups: %s", model.__tablename__, unknown)
    for group in model.GROUPS:
        if group in updates and updates[group] is not None:
            setattr(row, group, updates[group])
    await db.flush()
    await db.refresh(row)
    return row


async def get_footer_settings(db: AsyncSession) -> FooterSettings:
    return await _get_or_create(db, FooterSettings)


async def update_footer_settings(db: AsyncSession, updates: dict[str, Any]) -> FooterSettings:
    return await _update(db, FooterSettings, updates)


async def get_contact_settings(db: AsyncSession) -> ContactSettings:
    return await _get_or_create(db, ContactSettings)


async def update_contact_settings(db: AsyncSession, updates: dict[str, Any]) -> ContactSettings:
    return await _update(db, ContactSettings, updates)


def active_items(items: Any) -> list[dict[str, Any]]:
    """Active entries of a settings list, in display order."""
    if not isinstance(items, list):
        return []
    visible = [item for item in items if isinstance(item, dict) and item.get("isActive", True)]
    return sorted(visible, key=lambda item: item.get("order", 0))
