"""API routes implementation.

Store and service errors are not caught here: the exception handlers
registered by the app factory turn them into the error envelope.
"""

from fastapi import APIRouter, Request, status
from datetime import datetime, timezone

from .schemas import (
    CreateLinkRequest,
    UpdateLinkRequest,
    LinkOut,
    LinkResponse,
    LinkListResponse,
    DeleteResponse,
    DeletedLink,
    HealthResponse,
    HealthStatus,
    ErrorResponse,
    Statistics,
    StatisticsResponse,
)
from tinylink.database.models import Link
from tinylink.common.url_builder import build_short_url, normalize_path_prefix
from tinylink.common.headers import build_base_url, get_forwarded_path_prefix

router = APIRouter()


def _path_prefix(request: Request, config) -> str:
    """Path prefix from X-Forwarded-Prefix, else the configured one."""
    return get_forwarded_path_prefix(dict(request.headers)) or normalize_path_prefix(config.path_prefix)


def _link_out(request: Request, link: Link) -> LinkOut:
    config = request.app.state.config
    base_url = build_base_url(
        headers=dict(request.headers),
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    return LinkOut(
        id=link.id,
        custom_code=link.custom_code,
        short_url=build_short_url(link.custom_code, base_url, _path_prefix(request, config)),
        title=link.title,
        url=link.url,
        description=link.description,
        click_count=link.click_count,
        created_at=link.created_at,
        updated_at=link.updated_at,
    )


@router.get(
    "/links",
    response_model=LinkListResponse,
    summary="List links",
    description="All links, most recently created first.",
)
async def list_links(request: Request):
    """List links."""
    service = request.app.state.service

    links = await service.list_links()

    return LinkListResponse(data=[_link_out(request, link) for link in links])


@router.post(
    "/links",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        409: {"model": ErrorResponse, "description": "Short code already exists"},
        503: {"model": ErrorResponse, "description": "No free short code could be generated"},
    },
    summary="Create link",
    description="Register a link. Optionally provide a custom short code.",
)
async def create_link(request: Request, body: CreateLinkRequest):
    """Register a link."""
    service = request.app.state.service

    link = await service.create_link(
        title=body.title,
        url=body.url,
        description=body.description,
        custom_code=body.custom_code,
    )

    return LinkResponse(data=_link_out(request, link))


@router.get(
    "/links/id/{link_id}",
    response_model=LinkResponse,
    responses={404: {"model": ErrorResponse, "description": "Link not found"}},
    summary="Get link by id",
)
async def get_link_by_id(request: Request, link_id: int):
    """Get a link by id."""
    service = request.app.state.service

    link = await service.get_link_by_id(link_id)

    return LinkResponse(data=_link_out(request, link))


@router.get(
    "/links/{code}",
    response_model=LinkResponse,
    responses={404: {"model": ErrorResponse, "description": "Short code not found"}},
    summary="Get link stats",
    description="Get a link by short code including its click count. Does not count as a click.",
)
async def get_link_by_code(request: Request, code: str):
    """Get link stats by short code."""
    service = request.app.state.service

    link = await service.get_link_by_code(code)

    return LinkResponse(data=_link_out(request, link))


@router.patch(
    "/links/{link_id}",
    response_model=LinkResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        404: {"model": ErrorResponse, "description": "Link not found"},
    },
    summary="Edit link",
    description="Change title, URL or description. The short code cannot be changed.",
)
async def update_link(request: Request, link_id: int, body: UpdateLinkRequest):
    """Edit a link."""
    service = request.app.state.service

    link = await service.update_link(
        link_id,
        title=body.title,
        url=body.url,
        description=body.description,
    )

    return LinkResponse(data=_link_out(request, link))


@router.delete(
    "/links/{link_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse, "description": "Link not found"}},
    summary="Delete link",
    description="Delete a link. Its short code can be reused immediately.",
)
async def delete_link(request: Request, link_id: int):
    """Delete a link."""
    service = request.app.state.service

    await service.delete_link(link_id)

    return DeleteResponse(data=DeletedLink(id=link_id))


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    summary="Get statistics",
    description="Get service-wide statistics.",
)
async def get_statistics(request: Request):
    """Get service statistics."""
    service = request.app.state.service

    stats = await service.get_statistics()

    return StatisticsResponse(data=Statistics(**stats))


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        data=HealthStatus(
            status="healthy" if health["overall"] else "unhealthy",
            store="healthy" if health["store"] else "unhealthy",
            timestamp=datetime.now(timezone.utc),
        )
    )
