"""
FastAPI application entry point for the invoicing dashboard backend.

This module creates the FastAPI app instance and registers all routers.
"""

import os
import logging
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from dashboard.config import settings
from dashboard.routes.auth import router as auth_router
from dashboard.routes.health import router as health_router
from dashboard.routes.invoices import router as invoices_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS env var
    - ENVIRONMENT=testing/development: Allows all origins for local dev

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    environment = os.getenv("ENVIRONMENT", "development")

    if environment == "production":
        cors_origins = os.getenv("CORS_ALLOWED_ORIGINS", "")
        if cors_origins:
            origins = [origin.strip() for origin in cors_origins.split(",")]
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
            return origins
        else:
            logger.warning(
                "CORS_ALLOWED_ORIGINS not set in production. "
                "No web origins allowed. Set CORS_ALLOWED_ORIGINS for web clients."
            )
            return []
    else:
        logger.info(f"CORS configured for {environment}: allowing all origins")
        return ["*"]


# Create FastAPI app
app = FastAPI(
    title="Invoicing Dashboard API",
    description="Form handling and persistence for the invoicing dashboard",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log detailed validation errors for debugging."""
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": jsonable_encoder(exc.errors()),
        }
    )

# Configure CORS with environment-based origins
cors_origins = _get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(invoices_router)

logger.info("FastAPI app initialized successfully")
