from fastapi import APIRouter

from perfboard.core.config import settings

router = APIRouter()

@router.get("/")
def root():
    return {
        "name": "Performance Dashboard",
        "status": "ok",
        "storage": settings.STORAGE_BACKEND,
        "docs": "/docs",
        "health": "/health",
    }
