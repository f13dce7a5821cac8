"""Tests for per-section background overrides and scheduling buttons."""

import pytest

from psisite.config_values import SectionColorSpec
from psisite.services.section_styles import (
    COLOR_PRESET_GROUPS,
    COLOR_PRESETS,
    DEFAULT_GRADIENT_DIRECTION,
    SECTION_SELECTORS,
    SchedulingButtonStyle,
    build_section_styles,
    compute_section_style,
    gradient_direction,
    is_scheduling_label,
    resolve_selector,
)


def spec(**fields):
    return SectionColorSpec.model_validate(fields)


class TestGradientDirection:
    @pytest.mark.parametrize(
        "token,expected",
        [
            ("to-r", "to right"),
            ("to-l", "to left"),
            ("to-b", "to bottom"),
            ("to-t", "to top"),
            ("to-br", "to bottom right"),
            ("to-bl", "to bottom left"),
            ("to-tr", "to top right"),
            ("to-tl", "to top left"),
        ],
    )
    def test_known_tokens(self, token, expected):
        assert gradient_direction(token) == expected

    def test_unknown_token_defaults(self):
        assert gradient_direction("to-xx") == DEFAULT_GRADIENT_DIRECTION == "to bottom right"
        assert gradient_direction(None) == "to bottom right"


class TestComputeSectionStyle:
    """Test the pure spec -> style descriptor function."""

    def test_solid_background(self):
        style = compute_section_style("hero", spec(backgroundType="solid", backgroundColor="#fde68a"))
        assert style.declarations == {"background-color": "#fde68a"}
        assert style.overlay is None
        assert style.content_style == ""

    def test_gradient_background(self):
        style = compute_section_style(
            "about",
            spec(backgroundType="gradient", gradientColors=["#fff", "#000"], gradientDirection="to-tl"),
        )
        assert style.declarations["background-image"] == "linear-gradient(to top left, #fff, #000)"
        assert "background-color" not in style.declarations

    def test_gradient_with_unknown_direction(self):
        style = compute_section_style(
            "about",
            spec(backgroundType="gradient", gradientColors=["#fff", "#000"], gradientDirection="to-xx"),
        )
        assert style.declarations["background-image"].startswith("linear-gradient(to bottom right,")

    def test_pattern_uses_base_color_only(self):
        style = compute_section_style("faq", spec(backgroundType="pattern", backgroundColor="#eee"))
        assert style.declarations == {"background-color": "#eee"}

    def test_opacity_of_one_is_omitted(self):
        assert "opacity" not in compute_section_style("faq", spec(backgroundType="solid", opacity=1)).declarations
        assert compute_section_style("faq", spec(backgroundType="solid", opacity=0.8)).declarations["opacity"] == "0.8"

    def test_overlay(self):
        style = compute_section_style(
            "contact",
            spec(backgroundType="solid", backgroundColor="#fff", overlayColor="#000", overlayOpacity=0.4),
        )
        assert style.declarations["position"] == "relative"
        assert style.overlay is not None
        overlay = style.overlay.declarations
        assert overlay["position"] == "absolute"
        assert overlay["pointer-events"] == "none"
        assert overlay["z-index"] == "1"
        assert overlay["opacity"] == "0.4"
        assert style.content_declarations == {"position": "relative", "z-index": "2"}

    def test_zero_overlay_opacity_means_no_overlay(self):
        style = compute_section_style("contact", spec(backgroundType="solid", overlayColor="#000", overlayOpacity=0))
        assert style.overlay is None
        assert "position" not in style.declarations

    def test_unsafe_values_are_dropped(self):
        style = compute_section_style("hero", spec(backgroundType="solid", backgroundColor="red; display: none"))
        assert style.declarations == {}

    def test_idempotent(self):
        """Computing the same spec twice gives identical descriptors."""
        value = spec(backgroundType="solid", backgroundColor="#111", overlayColor="#000", overlayOpacity=0.5)
        assert compute_section_style("hero", value) == compute_section_style("hero", value)


class TestBuildSectionStyles:
    def test_unknown_and_malformed_sections_are_skipped(self):
        styles = build_section_styles({
            "hero": {"backgroundType": "solid", "backgroundColor": "#123456"},
            "banner": {"backgroundType": "solid", "backgroundColor": "#000"},
            "faq": {"backgroundType": "neon"},
            "about": {"backgroundType": "solid", "opacity": 3},
        })
        assert set(styles) == {"hero"}

    def test_non_mapping_value(self):
        assert build_section_styles(None) == {}
        assert build_section_styles(["hero"]) == {}

    def test_payload_lists_selectors(self):
        styles = build_section_styles({"gallery": {"backgroundType": "solid", "backgroundColor": "#fff"}})
        payload = styles["gallery"].to_dict()
        assert payload["selectors"][0] == "#photo-carousel-section"
        assert payload["overlay"] is None
        assert styles["gallery"].element_id == "photo-carousel-section"


class TestResolveSelector:
    def test_first_present_selector_wins(self):
        present = ['[data-section="faq"]', ".faq-section"]
        assert resolve_selector("faq", present) == '[data-section="faq"]'

    def test_missing_section(self):
        assert resolve_selector("faq", []) is None
        assert resolve_selector("banner", list(SECTION_SELECTORS["faq"])) is None


class TestSchedulingButtons:
    """Booking buttons pick up the configured color."""

    def test_label_detection(self):
        assert is_scheduling_label("Agendar consulta")
        assert is_scheduling_label("MARQUE SUA CONSULTA")
        assert not is_scheduling_label("Saiba mais")
        assert not is_scheduling_label(None)

    def test_style_applies_by_label(self):
        button = SchedulingButtonStyle.from_general_info({"schedulingButtonColor": "#10b981"})
        assert button.style_for("Agendar consulta") == "background-color: #10b981"
        assert button.style_for("Saiba mais") == ""

    def test_style_applies_by_marker_class(self):
        button = SchedulingButtonStyle("#10b981")
        assert button.style_for("Fale comigo", "px-4 scheduling-button") == "background-color: #10b981"
        assert button.style_for("Fale comigo", ["btn-scheduling"]) == "background-color: #10b981"

    def test_no_color_no_override(self):
        button = SchedulingButtonStyle.from_general_info({})
        assert button.style_for("Agendar consulta") == ""
        assert SchedulingButtonStyle.from_general_info(None).color is None


class TestColorPresets:
    def test_ids_are_unique(self):
        total = sum(len(presets) for _, presets in COLOR_PRESET_GROUPS)
        assert len(COLOR_PRESETS) == total

    @pytest.mark.parametrize("preset_id", sorted(COLOR_PRESETS))
    def test_every_preset_paints_a_background(self, preset_id):
        style = compute_section_style("hero", spec(**COLOR_PRESETS[preset_id].spec))
        assert {"background-color", "background-image"} & set(style.declarations)
        assert "opacity" not in style.declarations

    def test_gradient_preset(self):
        preset = COLOR_PRESETS["calm-green"]
        assert preset.spec["gradientColors"] == ["#f0fdf4", "#dcfce7"]
        assert compute_section_style("faq", spec(**preset.spec)).style == (
            "background-image: linear-gradient(to bottom right, #f0fdf4, #dcfce7)"
        )
