"""Redirect routes: the public side of short links."""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import RedirectResponse

router = APIRouter()


@router.get("/health", include_in_schema=False)
async def health_check_web(request: Request):
    """Health check endpoint (simple version for load balancers)."""
    service = request.app.state.service

    health = await service.health_check()

    if health["overall"]:
        return {"status": "healthy"}
    else:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy",
        )


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the link target, recording one click.

    Unknown codes raise NotFound, which the app turns into a 404.
    """
    service = request.app.state.service

    target = await service.resolve(short_code)

    # 302 so browsers come back through us and every visit is counted
    return RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)
