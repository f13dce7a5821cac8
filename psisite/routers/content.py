"""
CRUD API for the relational content lists (testimonials, FAQ, services,
specialties, photo carousel).

Public routes list active rows in display order; admin routes see every row.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Any

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel
from sqlalchemy import select

from psisite.db import Base
from psisite.deps import CurrentAdmin, DBSession
from psisite.models.content import FaqItem, PhotoCarouselItem, Service, Specialty, Testimonial

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["content"])

Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ContentSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ContentOut(ContentSchema):
    id: int
    is_active: bool
    order: int
    created_at: datetime | None = None


class ContentIn(ContentSchema):
    is_active: bool = True
    order: int = 0


# Testimonials

class TestimonialIn(ContentIn):
    name: Text
    service: Text
    testimonial: Text
    rating: int = Field(5, ge=1, le=5)
    photo: str | None = None


class TestimonialUpdate(ContentSchema):
    name: Text | None = None
    service: Text | None = None
    testimonial: Text | None = None
    rating: int | None = Field(None, ge=1, le=5)
    photo: str | None = None
    is_active: bool | None = None
    order: int | None = None


class TestimonialOut(ContentOut):
    name: str
    service: str
    testimonial: str
    rating: int
    photo: str | None = None


# FAQ

class FaqItemIn(ContentIn):
    question: Text
    answer: Text


class FaqItemUpdate(ContentSchema):
    question: Text | None = None
    answer: Text | None = None
    is_active: bool | None = None
    order: int | None = None


class FaqItemOut(ContentOut):
    question: str
    answer: str


# Services

class ServiceIn(ContentIn):
    title: Text
    description: Text
    icon: Text = "Brain"
    gradient: Text = "from-pink-500 to-purple-600"
    price: str | None = None
    duration: str | None = None
    show_price: bool = False
    show_duration: bool = False


class ServiceUpdate(ContentSchema):
    title: Text | None = None
    description: Text | None = None
    icon: Text | None = None
    gradient: Text | None = None
    price: str | None = None
    duration: str | None = None
    show_price: bool | None = None
    show_duration: bool | None = None
    is_active: bool | None = None
    order: int | None = None


class ServiceOut(ContentOut):
    title: str
    description: str
    icon: str
    gradient: str
    price: str | None = None
    duration: str | None = None
    show_price: bool
    show_duration: bool


# Specialties

class SpecialtyIn(ContentIn):
    title: Text
    description: Text
    icon: Text = "Brain"
    icon_color: Text = "#ec4899"


class SpecialtyUpdate(ContentSchema):
    title: Text | None = None
    description: Text | None = None
    icon: Text | None = None
    icon_color: Text | None = None
    is_active: bool | None = None
    order: int | None = None


class SpecialtyOut(ContentOut):
    title: str
    description: str
    icon: str
    icon_color: str


# Photo carousel

class PhotoIn(ContentIn):
    title: Text
    description: str | None = None
    image_url: Text
    show_text: bool = True


class PhotoUpdate(ContentSchema):
    title: Text | None = None
    description: str | None = None
    image_url: Text | None = None
    show_text: bool | None = None
    is_active: bool | None = None
    order: int | None = None


class PhotoOut(ContentOut):
    title: str
    description: str | None = None
    image_url: str
    show_text: bool


@dataclass(frozen=True)
class ContentResource:
    path: str
    model: type[Base]
    create_schema: type[ContentIn]
    update_schema: type[ContentSchema]
    out_schema: type[ContentOut]


RESOURCES = (
    ContentResource("testimonials", Testimonial, TestimonialIn, TestimonialUpdate, TestimonialOut),
    ContentResource("faq", FaqItem, FaqItemIn, FaqItemUpdate, FaqItemOut),
    ContentResource("services", Service, ServiceIn, ServiceUpdate, ServiceOut),
    ContentResource("specialties", Specialty, SpecialtyIn, SpecialtyUpdate, SpecialtyOut),
    ContentResource("photo-carousel", PhotoCarouselItem, PhotoIn, PhotoUpdate, PhotoOut),
)


def serialize(resource: ContentResource, row: Any) -> dict[str, Any]:
    return resource.out_schema.model_validate(row).model_dump(by_alias=True, mode="json")


async def list_active(db, model: type[Base]) -> list[Any]:
    """Active rows of a content table in display order."""
    result = await db.execute(
        select(model).where(model.is_active.is_(True)).order_by(model.order, model.id)
    )
    return list(result.scalars().all())


def _register(resource: ContentResource) -> None:
    model = resource.model
    create_schema = resource.create_schema
    update_schema = resource.update_schema

    async def _get_or_404(db, item_id: int):
        row = await db.get(model, item_id)
        if row is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item não encontrado")
        return row

    @router.get(f"/{resource.path}", name=f"list_{model.__tablename__}")
    async def public_list(db: DBSession):
        return [serialize(resource, row) for row in await list_active(db, model)]

    @router.get(f"/admin/{resource.path}", name=f"admin_list_{model.__tablename__}")
    async def admin_list(db: DBSession, admin: CurrentAdmin):
        result = await db.execute(select(model).order_by(model.order, model.id))
        return [serialize(resource, row) for row in result.scalars().all()]

    @router.post(
        f"/admin/{resource.path}",
        status_code=status.HTTP_201_CREATED,
        name=f"create_{model.__tablename__}",
    )
    async def create(payload: create_schema, db: DBSession, admin: CurrentAdmin):  # type: ignore[valid-type]
        row = model(**payload.model_dump())
        db.add(row)
        await db.commit()
        await db.refresh(row)
        logger.info("Created %s #%s", model.__tablename__, row.id)
        return serialize(resource, row)

    @router.put(f"/admin/{resource.path}/{{item_id}}", name=f"update_{model.__tablename__}")
    async def update(item_id: int, payload: update_schema, db: DBSession, admin: CurrentAdmin):  # type: ignore[valid-type]
        row = await _get_or_404(db, item_id)
        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(row, field, value)
        await db.commit()
        await db.refresh(row)
        return serialize(resource, row)

    @router.delete(f"/admin/{resource.path}/{{item_id}}", name=f"delete_{model.__tablename__}")
    async def delete(item_id: int, db: DBSession, admin: CurrentAdmin):
        row = await _get_or_404(db, item_id)
        await db.delete(row)
        await db.commit()
        logger.info("Deleted %s #%s", model.__tablename__, item_id)
        return {"success": True}


for _resource in RESOURCES:
    _register(_resource)
