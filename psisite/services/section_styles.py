"""
Per-section background overrides.

The page is themed with static classes; the admin can override the
background of each section (solid color, gradient or pattern color),
its opacity, and lay a translucent overlay between background and content.

Style decisions are a pure function of the ``section_colors`` config:

    compute_section_style(spec) -> SectionStyle

Templates apply the resulting descriptors when rendering each section
(see the ``section`` macro in templates/macros.html). Every render starts
from an empty declaration set, so applying the same config any number of
times yields the same markup with exactly one overlay per section.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from psisite.config_values import SectionColorSpec

logger = logging.getLogger(__name__)

# Ordered selector fallbacks for each stylable section
SECTION_SELECTORS: dict[str, tuple[str, ...]] = {
    "hero": ("#hero-section", '[data-section="hero"]', ".hero-section"),
    "about": ("#about-section", '[data-section="about"]', ".about-section"),
    "services": ("#services-section", '[data-section="services"]', ".services-section"),
    "testimonials": ("#testimonials-section", '[data-section="testimonials"]', ".testimonials-section"),
    "gallery": (
        "#photo-carousel-section",
        '[data-section="gallery"]',
        ".photo-carousel-section",
        ".gallery-section",
    ),
    "faq": ("#faq-section", '[data-section="faq"]', ".faq-section"),
    "contact": ("#contact-section", '[data-section="contact"]', ".contact-section"),
    "inspirational": ("#inspirational-section", '[data-section="inspirational"]', ".inspirational-section"),
}

GRADIENT_DIRECTIONS: dict[str, str] = {
    "r": "to right",
    "l": "to left",
    "b": "to bottom",
    "t": "to top",
    "br": "to bottom right",
    "bl": "to bottom left",
    "tr": "to top right",
    "tl": "to top left",
}
DEFAULT_GRADIENT_DIRECTION = "to bottom right"

OVERLAY_CLASS = "section-overlay"
SCHEDULING_MARKER_CLASSES = frozenset({"scheduling-button", "btn-scheduling"})
SCHEDULING_KEYWORDS = ("agendar", "consulta")

# Values end up inside a style attribute; refuse anything that could break out of a declaration
_SAFE_CSS_VALUE = re.compile(r"^[#(),.%\w\s-]+$")


def gradient_direction(token: str | None) -> str:
    """Map a stored ``to-xx`` token to a CSS linear-gradient direction."""
    if not token:
        return DEFAULT_GRADIENT_DIRECTION
    return GRADIENT_DIRECTIONS.get(token.removeprefix("to-"), DEFAULT_GRADIENT_DIRECTION)


def _css_value(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    if not text or not _SAFE_CSS_VALUE.match(text):
        if text:
            logger.warning("Ignoring unsafe CSS value %r", text)
        return None
    return text


def _format_number(value: float) -> str:
    return f"{value:g}"


def style_attr(declarations: Mapping[str, str]) -> str:
    """Render declarations as an inline ``style`` attribute value."""
    return "; ".join(f"{prop}: {value}" for prop, value in declarations.items())


@dataclass(frozen=True)
class Overlay:
    color: str
    opacity: float

    @property
    def declarations(self) -> dict[str, str]:
        return {
            "position": "absolute",
            "top": "0",
            "left": "0",
            "right": "0",
            "bottom": "0",
            "background-color": self.color,
            "opacity": _format_number(self.opacity),
            "pointer-events": "none",
            "z-index": "1",
        }

    @property
    def style(self) -> str:
        return style_attr(self.declarations)


@dataclass(frozen=True)
class SectionStyle:
    """Everything a renderer needs to paint one section."""

    section_id: str
    declarations: dict[str, str] = field(default_factory=dict)
    overlay: Overlay | None = None

    @property
    def style(self) -> str:
        return style_attr(self.declarations)

    @property
    def content_declarations(self) -> dict[str, str]:
        """Styles for the section's direct children so they paint above the overlay."""
        if self.overlay is None:
            return {}
        return {"position": "relative", "z-index": "2"}

    @property
    def content_style(self) -> str:
        return style_attr(self.content_declarations)

    @property
    def selectors(self) -> tuple[str, ...]:
        return SECTION_SELECTORS.get(self.section_id, ())

    @property
    def element_id(self) -> str:
        for selector in self.selectors:
            if selector.startswith("#"):
                return selector[1:]
        return f"{self.section_id}-section"

    @property
    def class_names(self) -> str:
        """Every class selector of the section, so each fallback form matches."""
        return " ".join(s[1:] for s in self.selectors if s.startswith(".")) or f"{self.section_id}-section"

    def to_dict(self) -> dict[str, Any]:
        return {
            "sectionId": self.section_id,
            "selectors": list(self.selectors),
            "style": self.declarations,
            "contentStyle": self.content_declarations,
            "overlay": (
                {"className": OVERLAY_CLASS, "style": self.overlay.declarations}
                if self.overlay else None
            ),
        }


def compute_section_style(section_id: str, spec: SectionColorSpec) -> SectionStyle:
    """Turn one section's color spec into a style descriptor.

    Exactly one background strategy applies, picked by ``background_type``;
    unset fields add no declaration so the themed default shows through.
    """
    declarations: dict[str, str] = {}

    if spec.background_type == "gradient":
        if spec.gradient_colors:
            start, end = (_css_value(color) for color in spec.gradient_colors)
            if start and end:
                direction = gradient_direction(spec.gradient_direction)
                declarations["background-image"] = f"linear-gradient({direction}, {start}, {end})"
    else:
        # "pattern" imagery is static; only its base color is configurable
        color = _css_value(spec.background_color)
        if color:
            declarations["background-color"] = color

    if spec.opacity is not None and spec.opacity != 1:
        declarations["opacity"] = _format_number(spec.opacity)

    overlay = None
    overlay_color = _css_value(spec.overlay_color)
    if overlay_color and spec.overlay_opacity and spec.overlay_opacity > 0:
        declarations["position"] = "relative"
        overlay = Overlay(overlay_color, spec.overlay_opacity)

    return SectionStyle(section_id, declarations, overlay)


def build_section_styles(section_colors: Any) -> dict[str, SectionStyle]:
    """Compute descriptors for every configured section.

    Unknown section ids and malformed specs are logged and skipped; they
    never affect the other sections.
    """
    if not isinstance(section_colors, Mapping):
        if section_colors is not None:
            logger.warning("Ignoring malformed section_colors value of type %s", type(section_colors).__name__)
        return {}

    styles: dict[str, SectionStyle] = {}
    for section_id, raw_spec in section_colors.items():
        if section_id not in SECTION_SELECTORS:
            logger.warning("No selectors known for section %s; skipping color override", section_id)
            continue
        if not raw_spec:
            continue
        try:
            spec = SectionColorSpec.model_validate(raw_spec)
        except ValidationError as exc:
            logger.warning("Skipping invalid color spec for section %s: %s", section_id, exc.errors())
            continue
        styles[section_id] = compute_section_style(section_id, spec)
        logger.debug("Colors applied for section %s", section_id)
    return styles


def resolve_selector(section_id: str, present: Iterable[str]) -> str | None:
    """First selector of the section's fallback list found in ``present``."""
    available = set(present)
    for selector in SECTION_SELECTORS.get(section_id, ()):
        if selector in available:
            return selector
    logger.warning("Section element %s not found", section_id)
    return None


def is_scheduling_label(text: str | None) -> bool:
    """Whether a button/link label reads like a call to book an appointment."""
    label = (text or "").lower()
    return any(keyword in label for keyword in SCHEDULING_KEYWORDS)


@dataclass(frozen=True)
class SchedulingButtonStyle:
    """Background override for booking buttons, from ``general_info``."""

    color: str | None = None

    @classmethod
    def from_general_info(cls, general_info: Any) -> "SchedulingButtonStyle":
        color = None
        if isinstance(general_info, Mapping):
            color = _css_value(general_info.get("schedulingButtonColor"))
        return cls(color)

    def applies_to(self, label: str | None, classes: Iterable[str] = ()) -> bool:
        if not self.color:
            return False
        if SCHEDULING_MARKER_CLASSES.intersection(classes):
            return True
        return is_scheduling_label(label)

    def style_for(self, label: str | None, classes: str | Iterable[str] = "") -> str:
        """Inline style for a button, empty when no override applies."""
        if isinstance(classes, str):
            classes = classes.split()
        if self.applies_to(label, classes):
            return style_attr({"background-color": self.color})
        return ""


@dataclass(frozen=True)
class ColorPreset:
    """Ready-made background the admin can apply to a section in one click."""

    id: str
    name: str
    colors: tuple[str, ...]  # one color for solid, two for a gradient

    @property
    def spec(self) -> dict[str, Any]:
        """Background fields of a ``section_colors`` entry; overlay fields are left to the caller."""
        if len(self.colors) == 1:
            return {"backgroundType": "solid", "backgroundColor": self.colors[0], "opacity": 1}
        return {
            "backgroundType": "gradient",
            "backgroundColor": self.colors[0],
            "gradientColors": list(self.colors),
            "gradientDirection": "to-br",
            "opacity": 1,
        }

    @property
    def swatch(self) -> str:
        if len(self.colors) == 1:
            return style_attr({"background-color": self.colors[0]})
        return style_attr({"background-image": f"linear-gradient(to bottom right, {', '.join(self.colors)})"})


COLOR_PRESET_GROUPS: tuple[tuple[str, tuple[ColorPreset, ...]], ...] = (
    ("Profissional", (
        ColorPreset("white-pure", "Branco Puro", ("#ffffff",)),
        ColorPreset("gray-light", "Cinza Claro", ("#f8fafc",)),
        ColorPreset("blue-soft", "Azul Suave", ("#eff6ff",)),
    )),
    ("Feminino", (
        ColorPreset("pink-baby", "Rosa Bebê", ("#fdf2f8",)),
        ColorPreset("lavender", "Lavanda", ("#f3e8ff",)),
        ColorPreset("peach", "Pêssego", ("#fff7ed",)),
    )),
    ("Profissional - Serviços", (
        ColorPreset("clean-white", "Branco Limpo", ("#ffffff", "#f8fafc")),
        ColorPreset("trust-blue", "Azul Confiança", ("#f0f9ff", "#dbeafe")),
        ColorPreset("calm-green", "Verde Calmo", ("#f0fdf4", "#dcfce7")),
        ColorPreset("warm-gray", "Cinza Acolhedor", ("#f9fafb", "#f3f4f6")),
        ColorPreset("soft-beige", "Bege Suave", ("#fefcfb", "#fef7ed")),
    )),
    ("Gradientes Decorativos", (
        ColorPreset("pink-purple", "Rosa para Roxo", ("#fdf2f8", "#f3e8ff")),
        ColorPreset("blue-sky", "Azul Céu", ("#dbeafe", "#e0f2fe")),
        ColorPreset("sunset-warm", "Sunset Warm", ("#fed7aa", "#fecaca")),
        ColorPreset("nature-fresh", "Nature Fresh", ("#dcfce7", "#d1fae5")),
        ColorPreset("ocean-breeze", "Ocean Breeze", ("#e0f7fa", "#b2ebf2")),
        ColorPreset("mint-fresh", "Mint Fresh", ("#f0fdfa", "#ccfbf1")),
        ColorPreset("royal-purple", "Royal Purple", ("#f3e8ff", "#e9d5ff")),
        ColorPreset("golden-hour", "Golden Hour", ("#fef3c7", "#fde68a")),
        ColorPreset("cherry-blossom", "Cherry Blossom", ("#fce7f3", "#fbcfe8")),
        ColorPreset("arctic-blue", "Arctic Blue", ("#f0f9ff", "#e0f2fe")),
        ColorPreset("warm-embrace", "Warm Embrace", ("#fff7ed", "#fed7aa")),
        ColorPreset("soft-lavender", "Soft Lavender", ("#faf5ff", "#f3e8ff")),
    )),
)

COLOR_PRESETS: dict[str, ColorPreset] = {
    preset.id: preset for _, presets in COLOR_PRESET_GROUPS for preset in presets
}
