"""
psisite ASGI app: public page, admin panel and JSON API.

Run locally with ``python -m psisite.main`` or ``uvicorn psisite.main:app``.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from urllib.parse import quote

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from psisite.db import close_db, init_db
from psisite.deps import is_htmx
from psisite.routers import admin, auth, config, content, public, site_settings, uploads
from psisite.settings import settings
from psisite.templates_config import templates

LOG_FORMATS = {
    "text": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "json": '{"time": "%(asctime)s", "logger": "%(name)s", "level": "%(levelname)s", "message": "%(message)s"}',
}

logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMATS[settings.log_format])
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"
GENERIC_ERROR = "Ocorreu um erro inesperado. Tente novamente."


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    await init_db()
    logger.info("%s %s ready", settings.app_name, settings.app_version)
    yield
    await close_db()
    logger.info("%s stopped", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Tag each request with an id (client supplied or generated) and echo it back."""
    request.state.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    response = await call_next(request)
    response.headers["X-Request-ID"] = request.state.request_id
    return response


app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")


@app.get("/healthz", tags=["health"])
@app.get("/health", tags=["health"])
async def healthz():
    return {"status": "healthy"}


for module in (public, auth, admin, config, content, site_settings, uploads):
    app.include_router(module.router)


# --- Error responses -------------------------------------------------------
#
# /api paths (or clients asking only for JSON) get JSON, HTMX requests get
# a toast fragment, browsers get error.html.


def _wants_json(request: Request) -> bool:
    if request.url.path.startswith("/api/"):
        return True
    accept = request.headers.get("Accept", "")
    return "application/json" in accept and "text/html" not in accept


def _error_toast(request: Request, message: str, status_code: int):
    return templates.TemplateResponse(
        request,
        "partials/toast.html",
        {"toast": {"kind": "error", "message": message}},
        status_code=status_code,
    )


def _error_page(request: Request, message: str, status_code: int):
    return templates.TemplateResponse(
        request,
        "error.html",
        {"error": message, "status_code": status_code},
        status_code=status_code,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code >= 500:
        logger.error("HTTP %d on %s: %s", exc.status_code, request.url.path, exc.detail)

    if _wants_json(request):
        return JSONResponse({"detail": exc.detail}, status_code=exc.status_code, headers=exc.headers)

    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        login_url = f"/admin/login?next={quote(request.url.path)}"
        if is_htmx(request):
            return HTMLResponse("", headers={"HX-Redirect": login_url})
        return RedirectResponse(url=login_url, status_code=status.HTTP_302_FOUND)

    if is_htmx(request):
        return _error_toast(request, str(exc.detail), exc.status_code)
    return _error_page(request, str(exc.detail), exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request data is a 400 listing the offending fields."""
    fields = {
        ".".join(str(part) for part in err["loc"] if part != "body") or "body": err["msg"]
        for err in exc.errors()
    }
    if _wants_json(request):
        return JSONResponse(
            {"detail": {"error": "Dados inválidos", "fields": fields}},
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return _error_page(request, "Dados inválidos", status.HTTP_400_BAD_REQUEST)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
    if is_htmx(request):
        return _error_toast(request, GENERIC_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if _wants_json(request):
        return JSONResponse({"detail": "Erro interno do servidor"}, status_code=500)
    return _error_page(request, GENERIC_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("psisite.main:app", host=settings.host, port=settings.port, reload=settings.debug)
