"""
Admin login and logout.
"""

from typing import Annotated

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy import select

from psisite.deps import CurrentAdminOptional, DBSession, get_client_ip, is_htmx
from psisite.models.admin_user import AdminUser
from psisite.services.password import verify_password
from psisite.services.rate_limiter import auth_rate_limiter
from psisite.settings import settings
from psisite.templates_config import templates

router = APIRouter(prefix="/admin", tags=["auth"])


def _safe_next(next_url: str | None) -> str:
    # Only same-site paths; anything else falls back to the dashboard
    if next_url and next_url.startswith("/") and not next_url.startswith("//"):
        return next_url
    return "/admin"


def _render_login(request: Request, next_url: str, error: str | None = None, status_code: int = 200):
    return templates.TemplateResponse(
        request,
        "admin/login.html",
        {"next": next_url, "error": error},
        status_code=status_code,
    )


@router.get("/login", response_class=HTMLResponse)
async def login_page(
    request: Request,
    admin: CurrentAdminOptional,
    next: str = "/admin",
):
    if admin:
        return RedirectResponse(url=_safe_next(next), status_code=status.HTTP_302_FOUND)
    return _render_login(request, _safe_next(next))


@router.post("/login")
async def login(
    request: Request,
    db: DBSession,
    username: Annotated[str, Form()],
    password: Annotated[str, Form()],
    next: Annotated[str, Form()] = "/admin",
):
    next_url = _safe_next(next)
    if not auth_rate_limiter.is_allowed(f"login:{get_client_ip(request)}"):
        return _render_login(
            request,
            next_url,
            "Muitas tentativas de login. Tente novamente em instantes.",
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        )

    result = await db.execute(select(AdminUser).where(AdminUser.username == username.strip()))
    admin = result.scalar_one_or_none()
    if admin is None or not verify_password(password, admin.hashed_password):
        return _render_login(
            request,
            next_url,
            "Usuário ou senha inválidos",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    token = admin.generate_session_token()
    await db.commit()

    if is_htmx(request):
        response = HTMLResponse("")
        response.headers["HX-Redirect"] = next_url
    else:
        response = RedirectResponse(url=next_url, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=settings.admin_session_cookie,
        value=token,
        httponly=True,
        secure=not settings.debug,
        samesite="lax",
        max_age=settings.admin_session_hours * 3600,
        path="/",
    )
    return response


@router.post("/logout")
async def logout(db: DBSession, admin: CurrentAdminOptional):
    if admin:
        admin.clear_session()
        await db.commit()
    response = RedirectResponse(url="/admin/login", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.admin_session_cookie, path="/")
    return response
