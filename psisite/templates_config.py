"""
Shared Jinja2 templates configuration.

All routers import templates from here so every page gets the same filters.
"""

import re
from pathlib import Path

import bleach
import markdown
from fastapi.templating import Jinja2Templates
from markupsafe import Markup, escape

from psisite.services.gradient_text import badge_classes, render_gradient_text
from psisite.settings import settings

TEMPLATES_DIR = Path(__file__).parent / "templates"

ALLOWED_TAGS = [
    "p", "br", "strong", "b", "em", "i", "u", "s",
    "ul", "ol", "li", "a", "blockquote", "span",
]
ALLOWED_ATTRS = {
    "a": ["href", "title", "target", "rel"],
    "span": ["class"],
}


def markdown_filter(text: str | None) -> Markup:
    """Render admin-written markdown (about text, FAQ answers) as sanitized HTML."""
    if not text:
        return Markup("")
    html = markdown.markdown(text, extensions=["nl2br", "sane_lists"], output_format="html")
    return Markup(bleach.clean(html, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRS, strip=True))


def simple_markdown_filter(text: str | None) -> Markup:
    """
    Inline formatting for short copy: **bold**, *italic* and line breaks.

    Copy carried over from the old site embeds ``<br/>``; known-safe tags are
    kept and everything else is stripped.
    """
    if not text:
        return Markup("")

    if re.search(r"<[a-zA-Z][^>]*>", text):
        return Markup(bleach.clean(text, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRS, strip=True))

    html = str(escape(text))
    html = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", html)
    html = re.sub(r"(?<!\w)\*([^*]+?)\*(?!\w)", r"<em>\1</em>", html)
    html = html.replace("\n", "<br>")
    return Markup(html)


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

templates.env.globals["app_name"] = settings.app_name
templates.env.globals["app_version"] = settings.app_version

templates.env.filters["markdown"] = markdown_filter
templates.env.filters["md"] = simple_markdown_filter
templates.env.filters["gradient_text"] = render_gradient_text
templates.env.filters["badge_class"] = badge_classes
