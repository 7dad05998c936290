# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the PanelPlay API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agents.story_helper import StoryHelperAgent
from app.config import settings
from app.exceptions import (
    PanelPlayException,
    panelplay_exception_handler,
    validation_exception_handler,
)
from app.routers import health, comics, pages, explore, story_helper
from app.auth import routes as auth_routes
from lib.supabase_client import SupabaseBackend, SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: build the backend and story helper once and store them on
      app.state for the request dependencies
    - Shutdown: drop the references
    """
    # Startup
    logger.info(f"Starting PanelPlay API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    try:
        app.state.backend = SupabaseBackend.from_settings(settings)
    except SupabaseClientError as e:
        logger.error(f"Backend unavailable: {e}")
        app.state.backend = None

    app.state.story_helper = StoryHelperAgent.from_settings(settings)

    yield

    # Shutdown
    logger.info("Shutting down PanelPlay API")
    app.state.backend = None
    app.state.story_helper = None


# Create FastAPI application
app = FastAPI(
    title="PanelPlay API",
    description="""
## Serialized Comics API

PanelPlay lets creators publish comics page by page and readers discover them.

### How It Works

1. **Sign in** - Exchange email and password for a session token
2. **Create a Comic** - Title, description and visibility
3. **Upload Pages** - Images are appended as the next page number
4. **Read & Explore** - Public comics are listed newest first

### Story Helper

Describe a genre, your characters and an idea; the story helper returns a
synopsis and a 10-panel outline you can use as a new comic's description.

### Quick Start

```bash
# 1. Sign in
curl -X POST http://localhost:8000/api/v1/auth/sign-in \\
  -H "Content-Type: application/json" \\
  -d '{"email": "me@example.com", "password": "secret"}'

# 2. Create a comic
curl -X POST http://localhost:8000/api/v1/comics \\
  -H "Authorization: Bearer <token>" \\
  -H "Content-Type: application/json" \\
  -d '{"title": "Moonrise", "description": "A lighthouse keeper meets a comet."}'

# 3. Upload a page
curl -X POST http://localhost:8000/api/v1/comics/{id}/pages \\
  -H "Authorization: Bearer <token>" \\
  -F "file=@page1.png"
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Sign up, sign in and session verification",
        },
        {
            "name": "Comics",
            "description": "Dashboard, comic creation and the reader",
        },
        {
            "name": "Pages",
            "description": "Upload and delete comic pages",
        },
        {
            "name": "Explore",
            "description": "Discover public comics",
        },
        {
            "name": "Story Helper",
            "description": "AI story outline generator",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(PanelPlayException)
async def handle_panelplay_exception(request: Request, exc: PanelPlayException):
    """Handle custom PanelPlay exceptions."""
    return await panelplay_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle request validation failures."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Dashboard, creation, draft and reader
app.include_router(
    comics.router,
    prefix="/api/v1/comics",
    tags=["Comics"]
)

# Page management
app.include_router(
    pages.router,
    prefix="/api/v1/comics",
    tags=["Pages"]
)

# Discovery feed
app.include_router(
    explore.router,
    prefix="/api/v1",
    tags=["Explore"]
)

# Story helper (path kept at /api/story-helper for existing forms)
app.include_router(
    story_helper.router,
    prefix="/api",
    tags=["Story Helper"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "PanelPlay API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
