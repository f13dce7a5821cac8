# Models package
from psisite.db import Base
from psisite.models.admin_user import AdminUser
from psisite.models.content import FaqItem, PhotoCarouselItem, Service, Specialty, Testimonial
from psisite.models.page_settings import ContactSettings, FooterSettings
from psisite.models.site_config import ConfigKeys, SiteConfig

__all__ = [
    "Base",
    "AdminUser",
    "ConfigKeys",
    "ContactSettings",
    "FaqItem",
    "FooterSettings",
    "PhotoCarouselItem",
    "Service",
    "SiteConfig",
    "Specialty",
    "Testimonial",
]
