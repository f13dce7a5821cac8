"""
Site-wide template context built from the config store.

Everything the public page and the admin preview need is derived here from
the cached {key: value} map, so templates only ever see typed values with
defaults already applied.
"""

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from psisite import config_values as cv
from psisite.models.site_config import ConfigKeys
from psisite.services.config_cache import config_cache
from psisite.services.gradient_text import get_gradient
from psisite.services.section_styles import (
    SchedulingButtonStyle,
    SectionStyle,
    build_section_styles,
)
from psisite.services.visibility import PageBlock, ordered_blocks, resolve_visibility

DEFAULT_FAVICON_URL = "/static/favicon.svg"


@dataclass
class SiteContext:
    """Typed view of the whole config store."""

    general: cv.GeneralInfo
    hero: cv.HeroSection
    about: cv.AboutSection
    specialties: cv.SpecialtiesSection
    services: cv.ServicesSection
    testimonials: cv.TestimonialsSection
    gallery: cv.PhotoCarouselSection
    faq: cv.FaqSection
    contact: cv.ContactSection
    scheduling_card: cv.SchedulingCard
    inspirational: cv.InspirationalSection
    credentials: cv.AboutCredentials
    maintenance: cv.MaintenanceMode
    pixels: cv.MarketingPixels
    seo: cv.SeoMeta
    colors: cv.ThemeColors
    badge_gradient: str
    favicon_url: str
    hero_image_url: str | None
    visibility: dict[str, bool]
    blocks: list[PageBlock]
    section_styles: dict[str, SectionStyle] = field(default_factory=dict)
    scheduling_button: SchedulingButtonStyle = field(default_factory=SchedulingButtonStyle)

    @property
    def page_title(self) -> str:
        return self.seo.meta_title or self.general.site_name

    @property
    def meta_description(self) -> str:
        return self.seo.meta_description or self.general.description

    @property
    def css_vars(self) -> str:
        return (
            f"--brand-primary: {self.colors.primary}; "
            f"--brand-secondary: {self.colors.secondary}; "
            f"--brand-accent: {self.colors.accent}; "
            f"--brand-background: {self.colors.background};"
        )

    @property
    def about_credentials(self) -> list[cv.Credential]:
        """Active credentials in order; the built-in set while none is active."""
        return self.credentials.active() or cv.DEFAULT_CREDENTIALS.active()

    def style_for(self, section_id: str) -> SectionStyle:
        return self.section_styles.get(section_id) or SectionStyle(section_id)

    def is_visible(self, section_id: str) -> bool:
        return self.visibility.get(section_id, True)


def build_site_context(config: dict[str, Any]) -> SiteContext:
    """Build the template context from a {key: value} config map."""

    def load(key: str, model: type) -> Any:
        return cv.load_config_value(model, config.get(key))

    general = load(ConfigKeys.GENERAL_INFO, cv.GeneralInfo)
    visibility = resolve_visibility(config.get(ConfigKeys.SECTION_VISIBILITY))
    site_icon = load(ConfigKeys.SITE_ICON, cv.SiteIcon)
    hero_image = load(ConfigKeys.HERO_IMAGE, cv.HeroImage)
    gradient = load(ConfigKeys.BADGE_GRADIENT, cv.BadgeGradient)

    return SiteContext(
        general=general,
        hero=load(ConfigKeys.HERO_SECTION, cv.HeroSection),
        about=load(ConfigKeys.ABOUT_SECTION, cv.AboutSection),
        specialties=load(ConfigKeys.SPECIALTIES_SECTION, cv.SpecialtiesSection),
        services=load(ConfigKeys.SERVICES_SECTION, cv.ServicesSection),
        testimonials=load(ConfigKeys.TESTIMONIALS_SECTION, cv.TestimonialsSection),
        gallery=load(ConfigKeys.PHOTO_CAROUSEL_SECTION, cv.PhotoCarouselSection),
        faq=load(ConfigKeys.FAQ_SECTION, cv.FaqSection),
        contact=load(ConfigKeys.CONTACT_SECTION, cv.ContactSection),
        scheduling_card=load(ConfigKeys.SCHEDULING_CARD, cv.SchedulingCard),
        inspirational=load(ConfigKeys.INSPIRATIONAL_SECTION, cv.InspirationalSection),
        credentials=cv.load_credentials(config.get(ConfigKeys.ABOUT_CREDENTIALS)),
        maintenance=load(ConfigKeys.MAINTENANCE_MODE, cv.MaintenanceMode),
        pixels=load(ConfigKeys.MARKETING_PIXELS, cv.MarketingPixels),
        seo=load(ConfigKeys.SEO_META, cv.SeoMeta),
        colors=load(ConfigKeys.COLORS, cv.ThemeColors),
        badge_gradient=get_gradient(gradient.gradient).key,
        favicon_url=site_icon.icon_path or DEFAULT_FAVICON_URL,
        hero_image_url=hero_image.path or None,
        visibility=visibility,
        blocks=ordered_blocks(config.get(ConfigKeys.SECTION_ORDER), visibility),
        section_styles=build_section_styles(config.get(ConfigKeys.SECTION_COLORS)),
        scheduling_button=SchedulingButtonStyle.from_general_info(general.to_value()),
    )


async def load_site_context(db: AsyncSession) -> SiteContext:
    return build_site_context(await config_cache.get_map(db))
