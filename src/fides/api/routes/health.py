"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_overpass_health_check():
    """Lazy import to avoid startup failures."""
    from ...services.churches.overpass_client import check_health as overpass_health_check
    return overpass_health_check


@router.get("/health/overpass", status_code=status.HTTP_200_OK)
def health_overpass() -> dict:
    """Check Overpass API reachability."""
    try:
        overpass_health_check = _get_overpass_health_check()
        status_flag = overpass_health_check()
        return {"service": "overpass", "healthy": status_flag}
    except Exception as e:
        return {"service": "overpass", "healthy": False, "error": str(e)}
