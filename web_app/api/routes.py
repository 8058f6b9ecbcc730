"""API routes implementation."""

from typing import List

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from datetime import datetime, timezone

from .schemas import (
    CreateLinkRequest,
    LinkResponse,
    DeleteResponse,
    HealthResponse,
    ErrorResponse,
)
from shortlinks.errors import LinkError

router = APIRouter()


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the JSON body used for every API failure."""
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get(
    "/links",
    response_model=List[LinkResponse],
    responses={500: {"model": ErrorResponse, "description": "Internal server error"}},
    summary="List links",
    description="List every short link, newest first.",
)
async def list_links(request: Request):
    """List all links."""
    service = request.app.state.service

    try:
        links = await service.list_links()
    except Exception:
        request.app.state.logger.exception("Error fetching links")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch links")

    return [LinkResponse.model_validate(link) for link in links]


@router.post(
    "/links",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL or code"},
        409: {"model": ErrorResponse, "description": "Custom code already exists"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short link",
    description="Create a short link. Optionally provide a custom 6-8 character code.",
)
async def create_link(request: Request, body: CreateLinkRequest):
    """Create a short link."""
    service = request.app.state.service

    try:
        link = await service.create_link(
            target_url=body.target_url,
            custom_code=body.custom_code,
        )
    except LinkError:
        raise
    except Exception:
        request.app.state.logger.exception(f"Error creating link for {body.target_url}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to create link")

    return LinkResponse.model_validate(link)


@router.get(
    "/links/{code}",
    response_model=LinkResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Link not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Get link",
    description="Get a single link including its click statistics.",
)
async def get_link(request: Request, code: str):
    """Get one link by code."""
    service = request.app.state.service

    try:
        link = await service.get_link(code)
    except LinkError:
        raise
    except Exception:
        request.app.state.logger.exception(f"Error fetching link {code}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch link")

    return LinkResponse.model_validate(link)


@router.delete(
    "/links/{code}",
    response_model=DeleteResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Link not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Delete link",
)
async def delete_link(request: Request, code: str):
    """Delete one link by code."""
    service = request.app.state.service

    try:
        await service.delete_link(code)
    except LinkError:
        raise
    except Exception:
        request.app.state.logger.exception(f"Error deleting link {code}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to delete link")

    return DeleteResponse(success=True)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service and its store are healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
