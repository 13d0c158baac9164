"""
LittleChef FastAPI application.

This is the main entry point for the LittleChef API.
"""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from adapters.db import Database, SQLiteCollectionStore
from adapters.llm import create_generator_from_config
from agent import ChefSession
from api import (
    cookbook_router,
    health_router,
    navigation_router,
    pantry_router,
    shopping_router,
)
from api.dependencies import set_session
from api.middleware import LoggingMiddleware, SecurityHeadersMiddleware
from config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def validate_environment():
    """Validate required environment variables."""
    # Skip validation during testing
    if any("pytest" in arg for arg in sys.argv):
        return

    if not settings.gemini_api_key:
        raise EnvironmentError(
            "Missing required environment variable: GEMINI_API_KEY"
        )


def create_session(db: Database) -> ChefSession:
    """Build the process-wide session and load the saved collections."""
    generator = create_generator_from_config()
    session = ChefSession(generator=generator, store=SQLiteCollectionStore(db))
    session.load()
    return session


# Validate environment after settings are loaded
validate_environment()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for the session and local storage."""
    db = Database(settings.sqlite_db)
    session = create_session(db)
    set_session(session)
    logger.info("LittleChef API started successfully")

    yield

    # Cleanup on shutdown - stop pending requests first, then storage
    await session.close()
    set_session(None)
    db.close()

    logger.info("LittleChef API stopped")


app = FastAPI(
    title="LittleChef API",
    description="AI-powered recipes from your pantry, cookbook and "
    "shopping list",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
    ],  # Add your frontend URLs
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

# Add security middleware
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(LoggingMiddleware)

# Include API routers
app.include_router(health_router)
app.include_router(navigation_router)
app.include_router(pantry_router)
app.include_router(cookbook_router)
app.include_router(shopping_router)


@app.get("/")
def read_root():
    """Root endpoint with API information."""
    return {
        "message": "LittleChef API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health/",
        "state": "/api/v1/state",
        "pantry": "/api/v1/pantry/",
        "cookbook": "/api/v1/cookbook/",
        "shopping": "/api/v1/shopping/",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
