"""
Gradient text formatting for section titles and badges.

Any ``(text)`` in admin-edited copy is rendered with the active badge
gradient, everything else in the default weight:

    "Cuidando da sua (saúde mental)"
    -> <span class="font-semibold">Cuidando da sua </span>
       <span class="bg-gradient-to-r ... font-bold">saúde mental</span>

There is no escape for literal parentheses; a ``(`` without a closing ``)``
is left as plain text.
"""

import re
from dataclasses import dataclass

from markupsafe import Markup, escape


@dataclass(frozen=True)
class Gradient:
    """Named two-color gradient from the badge palette."""

    key: str
    label: str
    classes: str  # Tailwind from-/to- classes
    colors: tuple[str, str]


BADGE_GRADIENTS: dict[str, Gradient] = {
    g.key: g
    for g in (
        Gradient("pink-purple", "Rosa → Roxo", "from-pink-500 to-purple-600", ("#ec4899", "#9333ea")),
        Gradient("blue-purple", "Azul → Roxo", "from-blue-500 to-purple-600", ("#3b82f6", "#9333ea")),
        Gradient("green-blue", "Verde → Azul", "from-green-500 to-blue-600", ("#22c55e", "#2563eb")),
        Gradient("orange-red", "Laranja → Vermelho", "from-orange-500 to-red-600", ("#f97316", "#dc2626")),
        Gradient("teal-cyan", "Turquesa → Ciano", "from-teal-500 to-cyan-600", ("#14b8a6", "#0891b2")),
        Gradient("indigo-purple", "Índigo → Roxo", "from-indigo-500 to-purple-600", ("#6366f1", "#9333ea")),
        Gradient("rose-pink", "Rose → Rosa", "from-rose-500 to-pink-600", ("#f43f5e", "#db2777")),
        Gradient("emerald-teal", "Esmeralda → Turquesa", "from-emerald-500 to-teal-600", ("#10b981", "#0d9488")),
        Gradient("violet-purple", "Violeta → Roxo", "from-violet-500 to-purple-600", ("#8b5cf6", "#9333ea")),
        Gradient("amber-orange", "Âmbar → Laranja", "from-amber-500 to-orange-600", ("#f59e0b", "#ea580c")),
        Gradient("sky-blue", "Céu → Azul", "from-sky-500 to-blue-600", ("#0ea5e9", "#2563eb")),
        Gradient("lime-green", "Lima → Verde", "from-lime-500 to-green-600", ("#84cc16", "#16a34a")),
        Gradient("fuchsia-pink", "Fúcsia → Rosa", "from-fuchsia-500 to-pink-600", ("#d946ef", "#db2777")),
        Gradient("cyan-blue", "Ciano → Azul", "from-cyan-500 to-blue-600", ("#06b6d4", "#2563eb")),
        Gradient("yellow-orange", "Amarelo → Laranja", "from-yellow-500 to-orange-600", ("#eab308", "#ea580c")),
    )
}

DEFAULT_GRADIENT = "pink-purple"

HIGHLIGHT_PATTERN = re.compile(r"\(([^)]+)\)")


@dataclass(frozen=True)
class TextSegment:
    text: str
    highlighted: bool


def get_gradient(gradient_key: str | None = None) -> Gradient:
    """Look up a palette entry, falling back to the default gradient."""
    return BADGE_GRADIENTS.get(gradient_key or DEFAULT_GRADIENT, BADGE_GRADIENTS[DEFAULT_GRADIENT])


def split_gradient_text(text: str | None) -> list[TextSegment]:
    """Split text into alternating plain/highlighted segments.

    re.split with one capture group alternates plain text (even indexes)
    and captured highlight text (odd indexes). Empty plain runs between
    adjacent highlights are dropped.
    """
    if not text:
        return []

    segments = []
    for index, part in enumerate(HIGHLIGHT_PATTERN.split(text)):
        highlighted = index % 2 == 1
        if part or highlighted:
            segments.append(TextSegment(part, highlighted))
    return segments


def gradient_classes(gradient_key: str | None = None) -> str:
    return f"bg-gradient-to-r {get_gradient(gradient_key).classes} bg-clip-text text-transparent font-bold"


def badge_classes(gradient_key: str | None = None) -> str:
    """CSS classes for a small uppercase gradient badge."""
    return f"bg-gradient-to-r {get_gradient(gradient_key).classes} text-transparent bg-clip-text font-bold"


def render_gradient_text(text: str | None, gradient_key: str | None = None) -> Markup:
    """Render admin copy with its ``(highlighted)`` parts as gradient spans."""
    highlight = gradient_classes(gradient_key)
    spans = []
    for segment in split_gradient_text(text):
        css = highlight if segment.highlighted else "font-semibold"
        spans.append(Markup('<span class="{}">{}</span>').format(css, escape(segment.text)))
    return Markup("").join(spans)
