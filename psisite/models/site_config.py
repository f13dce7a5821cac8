"""
Site configuration model: one editable content unit per key.

Each row holds a whole JSON object owned by one admin form (hero texts,
section colors, visibility flags, ...). Writes overwrite the whole value.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from psisite.db import Base
from psisite.models.base import JSONType


class SiteConfig(Base):
    """Key/value configuration entry."""

    __tablename__ = "site_config"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Configuration key (unique)
    key: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)

    # Whole JSON value; shape is defined per key in psisite.config_values
    value: Mapped[Any] = mapped_column(JSONType, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "key": self.key,
            "value": self.value,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return f"<SiteConfig {self.key}>"


# Configuration keys
class ConfigKeys:
    """Known configuration keys."""

    # Identity
    GENERAL_INFO = "general_info"
    SITE_ICON = "site_icon"
    HERO_IMAGE = "hero_image"

    # Section texts
    HERO_SECTION = "hero_section"
    ABOUT_SECTION = "about_section"
    SPECIALTIES_SECTION = "specialties_section"
    SERVICES_SECTION = "services_section"
    TESTIMONIALS_SECTION = "testimonials_section"
    PHOTO_CAROUSEL_SECTION = "photo_carousel_section"
    FAQ_SECTION = "faq_section"
    CONTACT_SECTION = "contact_section"
    SCHEDULING_CARD = "scheduling_card"
    INSPIRATIONAL_SECTION = "inspirational_section"
    ABOUT_CREDENTIALS = "about_credentials"

    # Appearance
    BADGE_GRADIENT = "badge_gradient"
    COLORS = "colors"
    SECTION_COLORS = "section_colors"
    SECTION_VISIBILITY = "section_visibility"
    SECTION_ORDER = "section_order"

    # Site behaviour
    MAINTENANCE_MODE = "maintenance_mode"
    MARKETING_PIXELS = "marketing_pixels"
    SEO_META = "seo_meta"
