"""
Section visibility and ordering for the public page.

Visibility is fail-open: a section is hidden only when its flag is present
and strictly ``False``. A missing config object, a missing key or any other
value keeps the section visible, so newly added sections are never hidden
by accident.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

# Every section the admin can toggle, in panel order
VISIBILITY_SECTIONS: tuple[str, ...] = (
    "hero",
    "about",
    "specialties",
    "gallery",
    "services",
    "testimonials",
    "faq",
    "contact",
    "inspirational",
)

# Older pages stored the gallery flag under this key
VISIBILITY_ALIASES = {"photo-carousel": "gallery"}


def resolve_visibility(value: Any) -> dict[str, bool]:
    """Map the ``section_visibility`` value to one flag per section."""
    flags = {section: True for section in VISIBILITY_SECTIONS}
    if not isinstance(value, Mapping):
        return flags

    for key, flag in value.items():
        section = VISIBILITY_ALIASES.get(key, key)
        if section in flags and flag is False:
            flags[section] = False
    return flags


@dataclass(frozen=True)
class PageBlock:
    """One renderable block of the home page."""

    key: str
    template: str
    sections: tuple[str, ...]  # visibility flags that keep the block on the page
    default_order: float


PAGE_BLOCKS: tuple[PageBlock, ...] = (
    PageBlock("hero", "sections/hero.html", ("hero",), 0),
    PageBlock("about", "sections/about.html", ("about", "specialties"), 1),
    PageBlock("services", "sections/services.html", ("services",), 2),
    PageBlock("testimonials", "sections/testimonials.html", ("testimonials",), 3),
    PageBlock("gallery", "sections/gallery.html", ("gallery",), 3.5),
    PageBlock("faq", "sections/faq.html", ("faq",), 4),
    PageBlock("contact", "sections/contact.html", ("contact",), 5),
    PageBlock("inspirational", "sections/inspirational.html", ("inspirational",), 6),
)


def block_position(block: PageBlock, order: Mapping[str, Any]) -> float:
    """Position of a block: the lowest stored position of its sections, else its default."""
    positions = []
    for section in block.sections:
        position = order.get(section)
        if position is None and section == "gallery":
            position = order.get("photo-carousel")
        if isinstance(position, (int, float)) and not isinstance(position, bool):
            positions.append(float(position))
    return min(positions) if positions else block.default_order


def ordered_blocks(order_value: Any, visibility: Mapping[str, bool]) -> list[PageBlock]:
    """Visible page blocks sorted by the ``section_order`` config.

    The about block carries the specialties list too and stays on the page
    while either of them is visible.
    """
    order = order_value if isinstance(order_value, Mapping) else {}
    visible = [
        block for block in PAGE_BLOCKS
        if any(visibility.get(section, True) for section in block.sections)
    ]
    return sorted(visible, key=lambda block: block_position(block, order))
