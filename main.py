"""
Recursive Learning Backend - FastAPI Application

Entry point for the personalized learning API: curriculum generation,
per-node tutoring chats and local session storage.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import get_settings, validate_required_settings
from learning.api import chat, curriculum, sessions
from shared.api import health

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Validate configuration on startup
validate_required_settings()

# Initialize FastAPI app
app = FastAPI(
    title="Recursive Learning Backend",
    description="Personalized curriculum trees with per-topic AI tutoring",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(curriculum.router)
app.include_router(chat.router)
app.include_router(sessions.router)

logger.info(f"Application configured (environment={settings.environment}, model={settings.llm_model})")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True
    )
