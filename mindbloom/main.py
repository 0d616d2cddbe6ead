"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mindbloom import __version__
from mindbloom.api import ai, auth, community, content, journal, mood, users
from mindbloom.api.middleware import install_middleware
from mindbloom.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logging.getLogger(__name__).info(f"MindBloom API starting ({settings.environment})")
    yield


app = FastAPI(
    title="MindBloom API",
    description="Journaling, mood tracking, AI companion and community feed",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)
install_middleware(app)

# Register routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(journal.router)
app.include_router(mood.router)
app.include_router(community.router)
app.include_router(ai.router)
app.include_router(content.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
