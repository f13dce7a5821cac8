"""
Relational content shown on the public page.

Each table is a manually ordered list the admin can toggle row by row.
"""

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from psisite.db import Base
from psisite.models.base import OrderedContentMixin


class Testimonial(Base, OrderedContentMixin):
    """Patient testimonial."""

    __tablename__ = "testimonials"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    service: Mapped[str] = mapped_column(String(255), nullable=False)
    testimonial: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, default=5, nullable=False)
    photo: Mapped[str | None] = mapped_column(String(500), nullable=True)


class FaqItem(Base, OrderedContentMixin):
    """Frequently asked question."""

    __tablename__ = "faq_items"

    id: Mapped[int] = mapped_column(primary_key=True)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)


class Service(Base, OrderedContentMixin):
    """Kind of appointment offered."""

    __tablename__ = "services"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    icon: Mapped[str] = mapped_column(String(100), nullable=False)
    gradient: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[str | None] = mapped_column(String(100), nullable=True)
    duration: Mapped[str | None] = mapped_column(String(100), nullable=True)
    show_price: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    show_duration: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class Specialty(Base, OrderedContentMixin):
    """Area of practice listed next to the about section."""

    __tablename__ = "specialties"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    icon: Mapped[str] = mapped_column(String(100), default="Brain", nullable=False)
    icon_color: Mapped[str] = mapped_column(String(20), default="#ec4899", nullable=False)


class PhotoCarouselItem(Base, OrderedContentMixin):
    """Photo of the office shown in the gallery carousel."""

    __tablename__ = "photo_carousel"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str] = mapped_column(String(500), nullable=False)
    show_text: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
