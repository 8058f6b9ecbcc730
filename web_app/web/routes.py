"""Web interface routes implementation."""

import os
from typing import List, Optional

from fastapi import APIRouter, Request, Form, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from shortlinks.common.url_builder import build_short_url
from shortlinks.common.headers import build_base_url, get_forwarded_path_prefix
from shortlinks.database.models import Link
from shortlinks.errors import LinkError, NotFound

router = APIRouter()

template_dir = os.path.join(os.path.dirname(__file__), "..", "..", "ux", "web")
templates = Jinja2Templates(directory=template_dir)


def _path_prefix_from_request(request: Request) -> str:
    """Path prefix from X-Forwarded-Prefix (proxy) or config. Normalized: leading slash, no trailing."""
    prefix = get_forwarded_path_prefix(dict(request.headers))
    if prefix:
        return prefix
    p = (getattr(request.app.state.config, "path_prefix", "") or "").strip().strip("/")
    return "/" + p if p else ""


def _short_url(request: Request, code: str) -> str:
    """Public short URL for ``code`` as seen by the visitor."""
    base_url = build_base_url(
        headers=dict(request.headers),
        fallback_base_url=request.app.state.config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    return build_short_url(
        short_code=code,
        base_url=base_url,
        path_prefix=_path_prefix_from_request(request),
    )


def filter_links(links: List[Link], query: str) -> List[Link]:
    """Links whose code or target URL contains ``query``, ignoring case."""
    needle = query.strip().lower()
    if not needle:
        return links
    return [
        link for link in links
        if needle in link.code.lower() or needle in link.target_url.lower()
    ]


async def _render_dashboard(
    request: Request,
    error: Optional[str] = None,
    target_url: str = "",
    custom_code: str = "",
    query: str = "",
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    all_links = await request.app.state.service.list_links()
    links = filter_links(all_links, query)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "prefix": _path_prefix_from_request(request),
            "links": links,
            "has_links": bool(all_links),
            "query": query.strip(),
            "short_urls": {link.code: _short_url(request, link.code) for link in links},
            "error": error,
            "target_url": target_url,
            "custom_code": custom_code,
        },
        status_code=status_code,
    )


def _render_error(request: Request, message: str, status_code: int) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "error.html",
        {"prefix": _path_prefix_from_request(request), "error_message": message},
        status_code=status_code,
    )


def _server_error(request: Request, message: str) -> HTMLResponse:
    request.app.state.logger.exception(message)
    return _render_error(
        request, "Internal Server Error", status.HTTP_500_INTERNAL_SERVER_ERROR
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def dashboard(request: Request, q: str = ""):
    """Dashboard with the create form and every link, optionally filtered by ``q``."""
    try:
        return await _render_dashboard(request, query=q)
    except Exception:
        return _server_error(request, "Error rendering dashboard")


@router.post("/create", response_class=HTMLResponse, include_in_schema=False)
async def create_link_web(
    request: Request,
    target_url: str = Form(""),
    custom_code: str = Form(""),
):
    """Handle form submission to create a link."""
    service = request.app.state.service

    target_url = target_url.strip()
    custom_code = custom_code.strip()

    try:
        link = await service.create_link(target_url=target_url, custom_code=custom_code or None)
    except LinkError as e:
        return await _render_dashboard(
            request,
            error=e.message,
            target_url=target_url,
            custom_code=custom_code,
            status_code=e.status_code,
        )
    except Exception:
        return _server_error(request, f"Error creating link for {target_url}")

    return RedirectResponse(
        url=f"{_path_prefix_from_request(request)}/code/{link.code}",
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get("/code/{code}", response_class=HTMLResponse, include_in_schema=False)
async def link_stats(request: Request, code: str):
    """Statistics page for a single link."""
    service = request.app.state.service

    try:
        link = await service.get_link(code)
    except NotFound as e:
        return _render_error(request, e.message, status.HTTP_404_NOT_FOUND)
    except Exception:
        return _server_error(request, f"Error fetching link {code}")

    return templates.TemplateResponse(
        request,
        "code.html",
        {
            "prefix": _path_prefix_from_request(request),
            "link": link,
            "short_url": _short_url(request, link.code),
        },
    )


@router.post("/code/{code}/delete", include_in_schema=False)
async def delete_link_web(request: Request, code: str):
    """Delete a link from the dashboard or stats page."""
    service = request.app.state.service

    try:
        await service.delete_link(code)
    except NotFound as e:
        return _render_error(request, e.message, status.HTTP_404_NOT_FOUND)
    except Exception:
        return _server_error(request, f"Error deleting link {code}")

    return RedirectResponse(
        url=f"{_path_prefix_from_request(request)}/",
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get("/{code}", include_in_schema=False)
async def redirect_to_target(request: Request, code: str):
    """Redirect to the target URL and count the click."""
    service = request.app.state.service

    try:
        target_url = await service.resolve(code)
    except NotFound:
        return PlainTextResponse("Link not found", status_code=status.HTTP_404_NOT_FOUND)
    except Exception:
        request.app.state.logger.exception(f"Error processing redirect for {code}")
        return PlainTextResponse(
            "Internal Server Error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    # Perform 302 redirect (temporary redirect for tracking)
    return RedirectResponse(url=target_url, status_code=status.HTTP_302_FOUND)
