"""
Registry of the admin panel's config forms.

Each form owns exactly one config key and edits the whole object stored
under it. The field list is read from the value model, so adding a field
to a model in ``config_values`` adds it to its form.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from psisite import config_values as cv
from psisite.models.site_config import ConfigKeys


class CacheStrategy(str, Enum):
    """How the config cache learns about a saved form."""

    OPTIMISTIC = "optimistic"  # splice the saved value into the cached list
    INVALIDATE = "invalidate"  # drop the cache; next read refetches


@dataclass(frozen=True)
class FormField:
    name: str  # wire name (camelCase)
    label: str
    widget: str  # text | textarea | color | gradient | checkbox
    required: bool


@dataclass(frozen=True)
class AdminForm:
    slug: str
    title: str
    key: str
    model: type[BaseModel]
    cache_strategy: CacheStrategy = CacheStrategy.INVALIDATE
    description: str = ""

    @property
    def fields(self) -> list[FormField]:
        return [_form_field(name, info) for name, info in self.model.model_fields.items()]

    def form_values(self, raw: Any) -> dict[str, Any]:
        """Current value with every missing field defaulted, keyed by wire name."""
        return cv.load_config_value(self.model, raw).to_value()

    def parse_form(self, form: dict[str, Any]) -> dict[str, Any]:
        """Submitted form data shaped for validation: unchecked boxes are False."""
        data: dict[str, Any] = {}
        for field in self.fields:
            if field.widget == "checkbox":
                data[field.name] = form.get(field.name) in ("on", "true", "1", True)
            else:
                data[field.name] = form.get(field.name, "")
        return data


def _form_field(name: str, info: FieldInfo) -> FormField:
    extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
    if info.annotation is bool:
        widget = "checkbox"
    else:
        widget = str(extra.get("widget", "text"))
    required = any(getattr(meta, "min_length", None) for meta in info.metadata)
    return FormField(
        name=info.alias or name,
        label=info.title or name.replace("_", " ").capitalize(),
        widget=widget,
        required=required,
    )


ADMIN_FORMS: dict[str, AdminForm] = {
    form.slug: form
    for form in (
        AdminForm(
            "general", "Informações gerais", ConfigKeys.GENERAL_INFO, cv.GeneralInfo,
            CacheStrategy.OPTIMISTIC, "Nome, CRP e descrição exibidos no cabeçalho e no rodapé.",
        ),
        AdminForm(
            "hero", "Seção inicial", ConfigKeys.HERO_SECTION, cv.HeroSection,
            CacheStrategy.OPTIMISTIC, "Use (parênteses) para destacar palavras com gradiente.",
        ),
        AdminForm("about", "Sobre", ConfigKeys.ABOUT_SECTION, cv.AboutSection),
        AdminForm(
            "specialties", "Especialidades", ConfigKeys.SPECIALTIES_SECTION, cv.SpecialtiesSection,
            CacheStrategy.OPTIMISTIC,
        ),
        AdminForm("services", "Serviços", ConfigKeys.SERVICES_SECTION, cv.ServicesSection),
        AdminForm(
            "testimonials", "Depoimentos", ConfigKeys.TESTIMONIALS_SECTION, cv.TestimonialsSection,
            CacheStrategy.OPTIMISTIC,
        ),
        AdminForm("gallery", "Galeria", ConfigKeys.PHOTO_CAROUSEL_SECTION, cv.PhotoCarouselSection),
        AdminForm("faq", "Perguntas frequentes", ConfigKeys.FAQ_SECTION, cv.FaqSection),
        AdminForm("contact", "Contato", ConfigKeys.CONTACT_SECTION, cv.ContactSection),
        AdminForm("scheduling-card", "Card de agendamento", ConfigKeys.SCHEDULING_CARD, cv.SchedulingCard),
        AdminForm(
            "inspirational", "Frase inspiradora", ConfigKeys.INSPIRATIONAL_SECTION, cv.InspirationalSection,
            description="Citação exibida na seção de inspiração.",
        ),
        AdminForm("maintenance", "Modo manutenção", ConfigKeys.MAINTENANCE_MODE, cv.MaintenanceMode),
        AdminForm("marketing", "Marketing", ConfigKeys.MARKETING_PIXELS, cv.MarketingPixels),
        AdminForm("seo", "SEO", ConfigKeys.SEO_META, cv.SeoMeta),
        AdminForm("badge-gradient", "Gradiente dos destaques", ConfigKeys.BADGE_GRADIENT, cv.BadgeGradient),
        AdminForm("colors", "Cores do tema", ConfigKeys.COLORS, cv.ThemeColors),
    )
}


def get_form(slug: str) -> AdminForm | None:
    return ADMIN_FORMS.get(slug)
