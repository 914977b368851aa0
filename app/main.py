# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Drip Journal API.
# It configures the FastAPI application with lifespan resources, middleware,
# routers, and exception handlers.
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

from app.config import settings
from app.exceptions import (
    DripJournalException,
    drip_journal_exception_handler,
    validation_exception_handler,
)
from app.routers import (
    bean_masters,
    drippers,
    filters,
    health,
    images,
    origins,
    shops,
    upload,
)
from core.services.image_service import ImageStore
from lib.database import Database

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

    - Startup: build the single Database handle and the ImageStore
    - Shutdown: dispose the database connection pool
    """
    logger.info(f"Starting Drip Journal API in {settings.ENVIRONMENT} mode")

    database = Database(settings.database_url, echo=settings.DEBUG)
    database.create_all()
    app.state.database = database
    app.state.image_store = ImageStore(settings.UPLOAD_DIR, settings.max_upload_size_bytes)
    logger.info(f"Upload directory: {settings.UPLOAD_DIR}")

    yield

    logger.info("Shutting down Drip Journal API")
    database.dispose()


# Create FastAPI application
app = FastAPI(
    title="Drip Journal API",
    description="""
## Coffee Tasting Journal API

Master data for coffee tasting records: origins, bean varieties, shops,
drippers and filters, plus photo upload and delivery.

### Quick Start

```bash
# Register an origin
curl -X POST http://localhost:8000/api/origins \\
  -H "Content-Type: application/json" \\
  -d '{"name": "Ethiopia"}'

# Upload a dripper photo
curl -X POST http://localhost:8000/api/upload \\
  -F "file=@v60.png;type=image/png" -F "category=drippers"

# Register the dripper with the returned imagePath
curl -X POST http://localhost:8000/api/drippers \\
  -H "Content-Type: application/json" \\
  -d '{"name": "V60", "size": "SIZE_02", "imagePath": "/images/drippers/<file>.png"}'
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Origins", "description": "Coffee-producing origins (unique names)"},
        {"name": "Bean Masters", "description": "Bean varieties"},
        {"name": "Shops", "description": "Where beans are bought"},
        {"name": "Drippers", "description": "Brewing drippers"},
        {"name": "Filters", "description": "Paper, metal and cloth filters"},
        {"name": "Images", "description": "Photo upload and delivery"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

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

app.add_exception_handler(DripJournalException, drip_journal_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


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

app.include_router(health.router, prefix="/api", tags=["Health"])

app.include_router(origins.router, prefix="/api/origins", tags=["Origins"])

app.include_router(bean_masters.router, prefix="/api/bean-masters", tags=["Bean Masters"])

app.include_router(shops.router, prefix="/api/shops", tags=["Shops"])

app.include_router(drippers.router, prefix="/api/drippers", tags=["Drippers"])

app.include_router(filters.router, prefix="/api/filters", tags=["Filters"])

app.include_router(upload.router, prefix="/api/upload", tags=["Images"])

app.include_router(images.router, prefix="/api/images", tags=["Images"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint - returns API info."""
    return {
        "name": "Drip Journal API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
