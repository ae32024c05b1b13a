"""Health check endpoint."""

from fastapi import APIRouter

from prbot.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    return {
        "status": "ok",
        "service": "prbot - pull request process checks",
        "dry_run": settings.dry_run,
    }
