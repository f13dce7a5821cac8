"""
Singleton settings tables for the footer and the contact block.

Both hold grouped JSON columns and are created with the default copy the
first time they are read.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from psisite.db import Base
from psisite.models.base import JSONType


class FooterSettings(Base):
    """Footer content groups."""

    __tablename__ = "footer_settings"

    GROUPS = ("general_info", "contact_buttons", "certification_items", "trust_seals", "bottom_info")

    id: Mapped[int] = mapped_column(primary_key=True)
    general_info: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)
    contact_buttons: Mapped[list] = mapped_column(JSONType, default=list, nullable=False)
    certification_items: Mapped[list] = mapped_column(JSONType, default=list, nullable=False)
    trust_seals: Mapped[list] = mapped_column(JSONType, default=list, nullable=False)
    bottom_info: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id}
        data.update({group: getattr(self, group) for group in self.GROUPS})
        data["updatedAt"] = self.updated_at.isoformat() if self.updated_at else None
        return data


class ContactSettings(Base):
    """Contact channels, office hours and location."""

    __tablename__ = "contact_settings"

    GROUPS = ("contact_items", "schedule_info", "location_info")

    id: Mapped[int] = mapped_column(primary_key=True)
    contact_items: Mapped[list] = mapped_column(JSONType, default=list, nullable=False)
    schedule_info: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)
    location_info: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id}
        data.update({group: getattr(self, group) for group in self.GROUPS})
        data["updatedAt"] = self.updated_at.isoformat() if self.updated_at else None
        return data
