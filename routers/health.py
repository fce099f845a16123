"""Health check router."""

from fastapi import APIRouter

router = APIRouter(tags=["health"])

HEALTH_BODY = {"status": "OK", "message": "Server is running"}


@router.get(
    "/api/health",
    summary="Health check",
    responses={200: {"description": "Server is running"}},
)
async def health_check() -> dict[str, str]:
    """Liveness probe. Does not touch the upstream APIs."""
    return dict(HEALTH_BODY)
