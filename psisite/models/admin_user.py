"""
Admin user model for the content panel.
"""

import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from psisite.db import Base
from psisite.models.base import TimestampMixin
from psisite.settings import settings


class AdminUser(Base, TimestampMixin):
    """Site owner account allowed to edit content."""

    __tablename__ = "admin_users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    # Single active session per admin
    session_token: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True, index=True)
    session_expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def generate_session_token(self) -> str:
        """Start a new session and return its token."""
        self.session_token = secrets.token_hex(32)
        self.session_expires_at = datetime.now(timezone.utc) + timedelta(hours=settings.admin_session_hours)
        return self.session_token

    def is_session_valid(self) -> bool:
        if not self.session_token or not self.session_expires_at:
            return False
        expires_at = self.session_expires_at
        if expires_at.tzinfo is None:
            # sqlite hands back naive datetimes
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at > datetime.now(timezone.utc)

    def clear_session(self) -> None:
        self.session_token = None
        self.session_expires_at = None

    def __repr__(self) -> str:
        return f"<AdminUser(id={self.id}, username='{self.username}')>"
