from fastapi import APIRouter

from authgate.core.config import get_settings


router = APIRouter(tags=["Health"])


@router.get("/")
@router.get("/health")
def read_health() -> dict[str, str]:
    """Liveness payload shared by the root and readiness endpoints."""
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
    }
