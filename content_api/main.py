"""
FastAPI application entry point for the Content Publishing API.

This module creates the FastAPI app instance, registers all routers and
installs the exception handlers that render every failure in the uniform
envelope: {"status": 0, "message": ..., "error": <code>}.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from content_api.auth.dependencies import get_token_service
from content_api.config import settings
from content_api.errors import AppError, InternalError
from content_api.routes.articles import router as articles_router
from content_api.routes.auth import router as auth_router
from content_api.routes.authors import router as authors_router
from content_api.routes.categories import router as categories_router
from content_api.utils.logging import configure_logging
from content_api.validation import first_error_message

# Configure logging
configure_logging(settings.LOG_LEVEL)

logger = logging.getLogger(__name__)


def _error_body(message: str, code: str) -> dict:
    return {"status": 0, "message": message, "error": code}


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins from CORS_ORIGINS (comma-separated).

    Defaults to the local web frontends (ports 3000 and 5000). Requests
    without an Origin header (curl, mobile apps) are not affected by CORS.
    """
    origins = [origin.strip() for origin in settings.CORS_ORIGINS if origin.strip()]
    logger.info(f"CORS configured for {settings.ENVIRONMENT} with {len(origins)} allowed origins")
    return origins


@asynccontextmanager
async def lifespan(app: FastAPI):
    # A missing signing secret must stop the process before it serves traffic
    get_token_service()
    logger.info("Content API started")
    yield


# Create FastAPI app
app = FastAPI(
    title="Content Publishing API",
    description="Authors, categories and articles for the publishing site",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Render application errors. Internal details are logged, never returned."""
    if isinstance(exc, InternalError):
        logger.error(f"Internal error on {request.method} {request.url.path}: {exc.message}")
        message = InternalError.default_message
    else:
        message = exc.message

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(message, exc.code),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Turn FastAPI validation failures into a 400 with the first error only.

    The request body is not logged: auth bodies carry passwords.
    """
    message, field = first_error_message(exc.errors())
    logger.warning(
        f"Validation error on {request.method} {request.url.path}: field={field} message={message}"
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(message, "validation_error"),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes, wrong methods and other framework errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail), "http_error"),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last resort: log with traceback, answer with a generic message."""
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(InternalError.default_message, InternalError.code),
    )


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(auth_router)
app.include_router(authors_router)
app.include_router(categories_router)
app.include_router(articles_router)


# Health check endpoint
@app.get("/health", tags=["system"])
async def health_check():
    """Check if API is running."""
    return {"status": "healthy", "service": "content-api"}

logger.info("FastAPI app initialized successfully")
