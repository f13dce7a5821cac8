"""
Typed shapes of the values stored under each known config key.

Values are validated once at the store boundary (admin writes) and parsed
leniently at read time: a missing, partial or corrupt value degrades to the
built-in default copy instead of failing the page.
"""

import logging
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    RootModel,
    StringConstraints,
    ValidationError,
)
from pydantic.alias_generators import to_camel

from psisite.models.site_config import ConfigKeys

logger = logging.getLogger(__name__)

# Required text: must not be blank once stripped
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
OptionalText = Annotated[str, StringConstraints(strip_whitespace=True)]


class ConfigModel(BaseModel):
    """Base for config values: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_value(self) -> dict[str, Any]:
        """Serialize to the JSON object stored under the key."""
        return self.model_dump(by_alias=True)


def textarea(title: str) -> Any:
    return {"title": title, "json_schema_extra": {"widget": "textarea"}}


class GeneralInfo(ConfigModel):
    header_name: RequiredText = Field("Dra. Adrielle Benhossi", title="Nome no cabeçalho")
    crp: RequiredText = Field("08/123456", title="CRP")
    site_name: RequiredText = Field("Dra. Adrielle Benhossi - Psicóloga", title="Nome do site")
    description: RequiredText = Field("Psicóloga CRP 08/123456", **textarea("Descrição"))
    scheduling_button_color: OptionalText = Field(
        "", title="Cor dos botões de agendamento", json_schema_extra={"widget": "color"}
    )


class HeroSection(ConfigModel):
    title: RequiredText = Field("Cuidando da sua (saúde mental) com carinho", title="Título")
    subtitle: RequiredText = Field(
        "Psicóloga especializada em terapia cognitivo-comportamental", **textarea("Subtítulo")
    )
    button_text1: RequiredText = Field("Agendar consulta", title="Texto do botão 1")
    button_text2: RequiredText = Field("Saiba mais", title="Texto do botão 2")


class AboutSection(ConfigModel):
    title: RequiredText = Field("Sobre (mim)", title="Título")
    subtitle: RequiredText = Field("Conheça minha trajetória", title="Subtítulo")
    professional_title: RequiredText = Field("Psicóloga Clínica", title="Título profissional")
    description: RequiredText = Field(
        "Sou psicóloga com experiência em atendimento de adultos e adolescentes.",
        **textarea("Descrição"),
    )


class SpecialtiesSection(ConfigModel):
    badge: RequiredText = Field("Especialidades", title="Badge")
    title: RequiredText = Field("Áreas de (atuação)", title="Título")
    subtitle: RequiredText = Field("Como posso te ajudar", **textarea("Subtítulo"))


class ServicesSection(ConfigModel):
    badge: RequiredText = Field("Serviços", title="Badge")
    title: RequiredText = Field("Como posso (ajudar)", title="Título")
    subtitle: OptionalText = Field("", title="Subtítulo")
    description: OptionalText = Field("", **textarea("Descrição"))


class TestimonialsSection(ConfigModel):
    badge: RequiredText = Field("Depoimentos", title="Badge")
    title: RequiredText = Field("O que dizem (sobre mim)", title="Título")
    subtitle: RequiredText = Field("Relatos de quem já passou por aqui", title="Subtítulo")
    description: OptionalText = Field("", **textarea("Descrição"))


class PhotoCarouselSection(ConfigModel):
    badge: RequiredText = Field("Galeria", title="Badge")
    title: RequiredText = Field("Conheça o (consultório)", title="Título")
    subtitle: RequiredText = Field("Um espaço acolhedor pensado para você", title="Subtítulo")


class FaqSection(ConfigModel):
    badge: OptionalText = Field("Dúvidas", title="Badge")
    title: OptionalText = Field("Perguntas (frequentes)", title="Título")
    subtitle: OptionalText = Field("", title="Subtítulo")
    description: OptionalText = Field("", **textarea("Descrição"))


class ContactSection(ConfigModel):
    badge: RequiredText = Field("Contato", title="Badge")
    title: RequiredText = Field("Vamos (conversar)?", title="Título")
    description: RequiredText = Field(
        "Entre em contato para agendar sua consulta", **textarea("Descrição")
    )


class SchedulingCard(ConfigModel):
    title: RequiredText = Field("Agende sua consulta", title="Título")
    subtitle: RequiredText = Field("Atendimento presencial e online", title="Subtítulo")
    description: OptionalText = Field("", **textarea("Descrição"))
    button_text: RequiredText = Field("Agendar consulta", title="Texto do botão")


class MaintenanceMode(ConfigModel):
    is_enabled: bool = Field(False, title="Modo manutenção ativo")
    title: RequiredText = Field("Site em manutenção", title="Título")
    message: RequiredText = Field(
        "Estamos fazendo melhorias. Volte em breve!", **textarea("Mensagem")
    )
    estimated_time: OptionalText = Field("", title="Previsão de retorno")
    contact_info: OptionalText = Field("", title="Contato")


class MarketingPixels(ConfigModel):
    facebook_pixel1: OptionalText = Field("", title="Facebook Pixel 1")
    facebook_pixel2: OptionalText = Field("", title="Facebook Pixel 2")
    google_pixel: OptionalText = Field("", title="Google Analytics / Ads ID")
    enable_google_indexing: bool = Field(True, title="Permitir indexação no Google")


class SeoMeta(ConfigModel):
    meta_title: OptionalText = Field("", title="Meta title")
    meta_description: OptionalText = Field("", **textarea("Meta description"))
    meta_keywords: OptionalText = Field("", title="Meta keywords")


class BadgeGradient(ConfigModel):
    gradient: RequiredText = Field(
        "pink-purple", title="Gradiente", json_schema_extra={"widget": "gradient"}
    )


class ThemeColors(ConfigModel):
    primary: RequiredText = Field("#ec4899", title="Cor primária", json_schema_extra={"widget": "color"})
    secondary: RequiredText = Field("#8b5cf6", title="Cor secundária", json_schema_extra={"widget": "color"})
    accent: RequiredText = Field("#6366f1", title="Cor de destaque", json_schema_extra={"widget": "color"})
    background: RequiredText = Field("#f8fafc", title="Fundo", json_schema_extra={"widget": "color"})


class InspirationalSection(ConfigModel):
    quote: RequiredText = Field(
        "A transformação começa quando decidimos cuidar de nós mesmos.", **textarea("Frase")
    )
    author: RequiredText = Field("Dra. Adrielle Benhossi", title="Autor")


class Credential(ConfigModel):
    """One card of the credentials grid in the about section."""

    id: int = Field(0, ge=0)
    title: RequiredText
    subtitle: RequiredText
    gradient: RequiredText = "from-pink-50 to-purple-50"
    is_active: bool = True
    order: int = Field(0, ge=0)


class AboutCredentials(RootModel[list[Credential]]):
    root: list[Credential] = Field(default_factory=list)

    def to_value(self) -> list[dict[str, Any]]:
        return [credential.to_value() for credential in self.root]

    def active(self) -> list[Credential]:
        return sorted((c for c in self.root if c.is_active), key=lambda c: c.order)

    def next_id(self) -> int:
        return max((c.id for c in self.root), default=0) + 1


# Shown while no credential is configured
DEFAULT_CREDENTIALS = AboutCredentials([
    Credential(id=1, title="Centro Universitário Integrado", subtitle="Formação Acadêmica",
               gradient="from-pink-50 to-purple-50", order=0),
    Credential(id=2, title="Terapia Cognitivo-Comportamental", subtitle="Abordagem Terapêutica",
               gradient="from-purple-50 to-indigo-50", order=1),
    Credential(id=3, title="Mais de 5 anos de experiência", subtitle="Experiência Profissional",
               gradient="from-green-50 to-teal-50", order=2),
])


class SiteIcon(ConfigModel):
    icon_path: OptionalText = ""


class HeroImage(ConfigModel):
    path: OptionalText = ""


class SectionColorSpec(ConfigModel):
    """Background override for one page section."""

    background_type: Literal["solid", "gradient", "pattern"]
    background_color: str | None = None
    gradient_colors: tuple[str, str] | None = None
    gradient_direction: str | None = None
    opacity: float | None = Field(None, ge=0, le=1)
    overlay_color: str | None = None
    overlay_opacity: float | None = Field(None, ge=0, le=1)

    def to_value(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class SectionColors(RootModel[dict[str, SectionColorSpec]]):
    root: dict[str, SectionColorSpec] = Field(default_factory=dict)

    def to_value(self) -> dict[str, Any]:
        return {section_id: spec.to_value() for section_id, spec in self.root.items()}


class SectionVisibility(RootModel[dict[str, bool]]):
    root: dict[str, bool] = Field(default_factory=dict)

    def to_value(self) -> dict[str, bool]:
        return dict(self.root)


class SectionOrder(RootModel[dict[str, float]]):
    root: dict[str, float] = Field(default_factory=dict)

    def to_value(self) -> dict[str, float]:
        return dict(self.root)


CONFIG_MODELS: dict[str, type[BaseModel]] = {
    ConfigKeys.GENERAL_INFO: GeneralInfo,
    ConfigKeys.HERO_SECTION: HeroSection,
    ConfigKeys.ABOUT_SECTION: AboutSection,
    ConfigKeys.SPECIALTIES_SECTION: SpecialtiesSection,
    ConfigKeys.SERVICES_SECTION: ServicesSection,
    ConfigKeys.TESTIMONIALS_SECTION: TestimonialsSection,
    ConfigKeys.PHOTO_CAROUSEL_SECTION: PhotoCarouselSection,
    ConfigKeys.FAQ_SECTION: FaqSection,
    ConfigKeys.CONTACT_SECTION: ContactSection,
    ConfigKeys.SCHEDULING_CARD: SchedulingCard,
    ConfigKeys.INSPIRATIONAL_SECTION: InspirationalSection,
    ConfigKeys.ABOUT_CREDENTIALS: AboutCredentials,
    ConfigKeys.MAINTENANCE_MODE: MaintenanceMode,
    ConfigKeys.MARKETING_PIXELS: MarketingPixels,
    ConfigKeys.SEO_META: SeoMeta,
    ConfigKeys.BADGE_GRADIENT: BadgeGradient,
    ConfigKeys.COLORS: ThemeColors,
    ConfigKeys.SITE_ICON: SiteIcon,
    ConfigKeys.HERO_IMAGE: HeroImage,
    ConfigKeys.SECTION_COLORS: SectionColors,
    ConfigKeys.SECTION_VISIBILITY: SectionVisibility,
    ConfigKeys.SECTION_ORDER: SectionOrder,
}


class ConfigValueError(ValueError):
    """Raised when a value does not match the shape registered for its key."""

    def __init__(self, key: str, errors: dict[str, str]):
        self.key = key
        self.errors = errors
        super().__init__(f"Invalid value for config key '{key}'")


def field_errors(exc: ValidationError) -> dict[str, str]:
    """Flatten a ValidationError into {field alias: message}."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        name = ".".join(str(part) for part in err["loc"]) or "__root__"
        if err["type"] == "string_too_short":
            message = "Campo obrigatório"
        else:
            message = err["msg"]
        errors.setdefault(name, message)
    return errors


def validate_config_value(key: str, value: Any) -> Any:
    """Validate a value about to be written under ``key``.

    Known keys are parsed with their model and returned in canonical form;
    unknown keys pass through untouched.
    """
    model = CONFIG_MODELS.get(key)
    if model is None:
        return value
    try:
        parsed = model.model_validate(value)
    except ValidationError as exc:
        raise ConfigValueError(key, field_errors(exc)) from exc
    return parsed.to_value()


def load_config_value(model: type[BaseModel], raw: Any) -> Any:
    """Parse a stored value, falling back to defaults for anything unusable.

    Blank strings count as absent so every unset field shows the default copy.
    Fields that fail validation are dropped and defaulted individually.
    """
    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning("Ignoring malformed %s value of type %s", model.__name__, type(raw).__name__)
        return model()

    data = {k: v for k, v in raw.items() if v is not None and v != ""}
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        bad_fields = {err["loc"][0] for err in exc.errors() if err["loc"]}
        logger.warning("Defaulting invalid fields %s of %s", sorted(map(str, bad_fields)), model.__name__)

    data = {k: v for k, v in data.items() if k not in bad_fields}
    try:
        return model.model_validate(data)
    except ValidationError:
        logger.warning("Falling back to default %s", model.__name__)
        return model()


def load_credentials(raw: Any) -> AboutCredentials:
    """Parse the stored credentials list, skipping entries that no longer validate."""
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Ignoring malformed about_credentials value of type %s", type(raw).__name__)
        return AboutCredentials()

    credentials = []
    for item in raw:
        try:
            credentials.append(Credential.model_validate(item))
        except ValidationError:
            logger.warning("Skipping invalid credential %r", item)
    return AboutCredentials(credentials)
