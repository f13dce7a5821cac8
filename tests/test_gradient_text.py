"""Tests for the (highlight) gradient text formatter."""

from psisite.services.gradient_text import (
    BADGE_GRADIENTS,
    DEFAULT_GRADIENT,
    TextSegment,
    badge_classes,
    get_gradient,
    render_gradient_text,
    split_gradient_text,
)


class TestSplitGradientText:
    """Test splitting admin copy into plain and highlighted segments."""

    def test_single_highlight(self):
        """Text around a highlight becomes plain segments in document order."""
        assert split_gradient_text("Cuidando da sua (saúde mental) com carinho") == [
            TextSegment("Cuidando da sua ", False),
            TextSegment("saúde mental", True),
            TextSegment(" com carinho", False),
        ]

    def test_multiple_highlights_alternate(self):
        segments = split_gradient_text("A (B) C (D)")
        assert [s.highlighted for s in segments] == [False, True, False, True]
        assert [s.text for s in segments] == ["A ", "B", " C ", "D"]

    def test_empty_input_yields_no_segments(self):
        assert split_gradient_text("") == []
        assert split_gradient_text(None) == []

    def test_no_parentheses_is_one_plain_segment(self):
        assert split_gradient_text("Sobre mim") == [TextSegment("Sobre mim", False)]

    def test_unclosed_parenthesis_stays_literal(self):
        assert split_gradient_text("Olá (mundo") == [TextSegment("Olá (mundo", False)]

    def test_empty_parentheses_are_not_a_highlight(self):
        assert split_gradient_text("Vazio ()") == [TextSegment("Vazio ()", False)]

    def test_nested_parentheses_close_at_first_paren(self):
        """Nesting is not special: the first ')' closes the highlight."""
        segments = split_gradient_text("A ((B) C)")
        assert TextSegment("(B", True) in segments
        assert segments[-1] == TextSegment(" C)", False)

    def test_adjacent_highlights_drop_empty_plain_runs(self):
        assert split_gradient_text("(A)(B)") == [TextSegment("A", True), TextSegment("B", True)]


class TestRenderGradientText:
    """Test HTML rendering of gradient text."""

    def test_highlight_gets_gradient_classes(self):
        html = str(render_gradient_text("Sobre (mim)", "blue-purple"))
        assert '<span class="font-semibold">Sobre </span>' in html
        assert "from-blue-500 to-purple-600" in html
        assert ">mim</span>" in html

    def test_text_is_escaped(self):
        html = str(render_gradient_text("<script>x</script> (<b>)"))
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "&lt;b&gt;" in html

    def test_unknown_gradient_falls_back_to_default(self):
        html = str(render_gradient_text("(x)", "no-such-gradient"))
        assert BADGE_GRADIENTS[DEFAULT_GRADIENT].classes in html

    def test_empty_text_renders_nothing(self):
        assert str(render_gradient_text("")) == ""


class TestGradientPalette:
    def test_palette_has_fifteen_entries(self):
        assert len(BADGE_GRADIENTS) == 15
        assert DEFAULT_GRADIENT == "pink-purple"

    def test_get_gradient_default(self):
        assert get_gradient(None).key == "pink-purple"
        assert get_gradient("teal-cyan").colors == ("#14b8a6", "#0891b2")

    def test_badge_classes_use_palette(self):
        assert "from-emerald-500 to-teal-600" in badge_classes("emerald-teal")
