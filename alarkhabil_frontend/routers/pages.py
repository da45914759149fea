import inspect
import logging
from typing import Awaitable, Callable, Union
from urllib.parse import quote, quote_from_bytes

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from alarkhabil_frontend import dependencies as deps
from alarkhabil_frontend.errors import ContentNotFound
from alarkhabil_frontend.services.pages_service import PagesService

logger = logging.getLogger(__name__)

router = APIRouter(default_response_class=HTMLResponse)

FALLBACK_ERROR_HTML = (
    "<!doctype html><html><head><title>Internal Server Error</title></head>"
    "<body><h1>Internal Server Error</h1></body></html>"
)

# Pages rendered entirely by client scripts; the server only sends the shell.
JAVASCRIPT_REQUIRED_PATHS = ("/invites/", "/signup/", "/signin/", "/account/")

PageRenderer = Callable[[], Union[str, Awaitable[str]]]

# RFC 3986 pchar delimiters, plus "/" and "%" so existing escapes survive
PATH_SAFE = "/%:@!$&'()*+,;="


def page_path(request: Request) -> str:
    """The request path as the client sent it, still percent-encoded."""
    raw_path = request.scope.get("raw_path")
    if raw_path is None:
        return quote(request.url.path, safe=PATH_SAFE)
    return quote_from_bytes(raw_path.split(b"?", 1)[0], safe=PATH_SAFE)


def error_response(service: PagesService, path: str) -> HTMLResponse:
    try:
        return HTMLResponse(service.error(path), status_code=500)
    except Exception as e:
        logger.error(f"Failed to render error page for {path}: {e}")
        return HTMLResponse(FALLBACK_ERROR_HTML, status_code=500)


async def render_page(
    request: Request, service: PagesService, render: PageRenderer
) -> HTMLResponse:
    """
    The one place a page's HTTP status is decided.
    Not-found outcomes are expected (old links) and are not errors.
    """
    path = page_path(request)
    try:
        html = render()
        if inspect.isawaitable(html):
            html = await html
        return HTMLResponse(html)
    except ContentNotFound:
        return HTMLResponse(service.not_found(path), status_code=404)
    except Exception as e:
        logger.error(f"Failed to render page {path}: {e}", exc_info=True)
        return error_response(service, path)


@router.get("/")
async def top_page(
    request: Request, service: PagesService = Depends(deps.get_pages_service)
):
    """Latest posts from every channel."""
    return await render_page(request, service, lambda: service.top(page_path(request)))


@router.get("/meta/")
async def meta_list_page(
    request: Request, service: PagesService = Depends(deps.get_pages_service)
):
    return await render_page(
        request, service, lambda: service.meta_list(page_path(request))
    )


@router.get("/meta/{page_name}/")
async def meta_page(
    page_name: str,
    request: Request,
    service: PagesService = Depends(deps.get_pages_service),
):
    return await render_page(
        request, service, lambda: service.meta_page(page_name, page_path(request))
    )


@router.get("/c/")
async def channel_list_page(
    request: Request, service: PagesService = Depends(deps.get_pages_service)
):
    return await render_page(
        request, service, lambda: service.channel_list(page_path(request))
    )


@router.get("/c/{handle}/")
async def channel_page(
    handle: str,
    request: Request,
    service: PagesService = Depends(deps.get_pages_service),
):
    """Channel profile followed by its posts."""
    return await render_page(
        request, service, lambda: service.channel(handle, page_path(request))
    )


@router.get("/c/{handle}/{post_uuid}/")
async def post_page(
    handle: str,
    post_uuid: str,
    request: Request,
    service: PagesService = Depends(deps.get_pages_service),
):
    """A single post; 404 unless it really lives in this channel."""
    return await render_page(
        request, service, lambda: service.post(handle, post_uuid, page_path(request))
    )


@router.get("/author/")
async def author_list_page(
    request: Request, service: PagesService = Depends(deps.get_pages_service)
):
    return await render_page(
        request, service, lambda: service.author_list(page_path(request))
    )


@router.get("/author/{author_uuid}/")
async def author_page(
    author_uuid: str,
    request: Request,
    service: PagesService = Depends(deps.get_pages_service),
):
    return await render_page(
        request, service, lambda: service.author(author_uuid, page_path(request))
    )


@router.get("/tags/")
async def tag_list_page(
    request: Request, service: PagesService = Depends(deps.get_pages_service)
):
    return await render_page(
        request, service, lambda: service.tag_list(page_path(request))
    )


@router.get("/tags/{tag_name:path}/")
async def tag_page(
    tag_name: str,
    request: Request,
    service: PagesService = Depends(deps.get_pages_service),
):
    return await render_page(
        request, service, lambda: service.tag(tag_name, page_path(request))
    )


async def javascript_required_page(
    request: Request, service: PagesService = Depends(deps.get_pages_service)
):
    return await render_page(
        request, service, lambda: service.javascript_required(page_path(request))
    )


for _path in JAVASCRIPT_REQUIRED_PATHS:
    router.add_api_route(_path, javascript_required_page, methods=["GET"])
