import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from alarkhabil_frontend import dependencies as deps
from alarkhabil_frontend.routers import api, pages
from alarkhabil_frontend.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

RESPONSE_HEADERS = {
    "content-security-policy": (
        "default-src 'self'; img-src 'self' data: blob:; "
        "connect-src 'self' http: https:; base-uri 'none'; "
        "form-action 'none'; frame-ancestors 'none';"
    ),
    "x-frame-options": "DENY",
    "x-content-type-options": "nosniff",
}

app = FastAPI(title="Alarkhabil Frontend", docs_url=None, redoc_url=None)


@app.middleware("http")
async def add_global_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in RESPONSE_HEADERS.items():
        response.headers.append(name, value)
    return response


@app.exception_handler(StarletteHTTPException)
async def not_found_fallback(request: Request, exc: StarletteHTTPException):
    """Unmatched page paths get the styled 404 page; the JSON API keeps JSON."""
    if exc.status_code != 404 or request.url.path.startswith(api.router.prefix):
        return await http_exception_handler(request, exc)

    path = pages.page_path(request)
    config = await deps.get_site_config()
    service = deps.get_pages_service(
        config, deps.get_backend_api(config), deps.get_markdown()
    )
    try:
        return HTMLResponse(service.not_found(path), status_code=404)
    except Exception as e:
        logger.error(f"Failed to render not-found page: {e}")
        return pages.error_response(service, path)


app.include_router(api.router)
app.include_router(pages.router)

if Path(settings.ASSETS_DIR).is_dir():
    app.mount("/assets", StaticFiles(directory=settings.ASSETS_DIR), name="assets")
if Path(settings.branding_dir).is_dir():
    app.mount(
        "/branding", StaticFiles(directory=settings.branding_dir), name="branding"
    )
