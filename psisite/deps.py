"""
FastAPI dependencies for the database session and admin authentication.
"""

from typing import Annotated

from fastapi import Cookie, Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from psisite.db import get_db
from psisite.models.admin_user import AdminUser
from psisite.settings import settings

# Type alias for database dependency
DBSession = Annotated[AsyncSession, Depends(get_db)]


async def get_current_admin_optional(
    request: Request,
    db: DBSession,
    admin_session: Annotated[str | None, Cookie(alias=settings.admin_session_cookie)] = None,
) -> AdminUser | None:
    """Admin owning the session cookie, or None when absent or expired."""
    if not admin_session:
        return None

    result = await db.execute(select(AdminUser).where(AdminUser.session_token == admin_session))
    admin = result.scalar_one_or_none()
    if admin is None or not admin.is_session_valid():
        return None

    request.state.admin = admin
    return admin


async def get_current_admin(
    request: Request,
    admin: Annotated[AdminUser | None, Depends(get_current_admin_optional)],
) -> AdminUser:
    """Require an admin session (401 otherwise; HTML requests get redirected to the login page)."""
    if admin is None:
        headers = {"HX-Redirect": "/admin/login"} if request.headers.get("HX-Request") else None
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Não autenticado",
            headers=headers,
        )
    return admin


CurrentAdmin = Annotated[AdminUser, Depends(get_current_admin)]
CurrentAdminOptional = Annotated[AdminUser | None, Depends(get_current_admin_optional)]


def is_htmx(request: Request) -> bool:
    return bool(request.headers.get("HX-Request"))


def get_client_ip(request: Request) -> str:
    """Client IP for rate limiting, honouring the proxy header."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"
