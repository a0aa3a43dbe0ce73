"""Health and observability routes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from internal.health import Status
from sleekid.clock import format_timestamp

router = APIRouter(prefix="/api/v1", tags=["health"])

# Set by app.py
_health_checker = None


def init(health_checker):
    """Initialize with the app's health checker."""
    global _health_checker
    _health_checker = health_checker


@router.get("/health")
async def health():
    """Health check with component status."""
    report = await _health_checker.check()
    status_code = 200 if report.status != Status.FAIL else 503
    return JSONResponse(content=report.to_dict(), status_code=status_code)


@router.get("/heartbeat")
async def heartbeat():
    """Lightweight heartbeat for frequent polling."""
    return {
        "status": "ok",
        "timestamp": format_timestamp(),
        "uptime_s": round(_health_checker.uptime, 1),
    }
