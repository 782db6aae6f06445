"""Health check API endpoints."""
from fastapi import APIRouter

from config import get_settings

router = APIRouter(tags=["health"])

SERVICE_NAME = "Recursive Learning Backend"
SERVICE_VERSION = "1.0.0"


@router.get("/")
def read_root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION
    }


@router.get("/config/models")
def get_model_config():
    """Return the completion model configuration."""
    settings = get_settings()
    return {
        "provider": "anthropic",
        "model_id": settings.llm_model,
        "max_tokens": settings.llm_max_tokens,
    }
