from fastapi import APIRouter

from ..config import settings
from ..core.clock import utc_now

router = APIRouter(tags=["status"])


@router.get("/health")
def health():
    return {
        "status": "ok",
        "app": settings.app_name,
        "environment": settings.environment,
        "time": utc_now().isoformat() + "Z",
    }
