"""
FastAPI application entry point.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from ndis_directory.core.config import settings
from ndis_directory.core.middleware import RequestIdMiddleware, get_request_id
from ndis_directory.core.logging import logger
from ndis_directory.core.exceptions import AppException
from ndis_directory.schemas.error import ErrorResponse, ErrorDetail, ErrorCode, ERROR_CODE_TO_HTTP_STATUS
from ndis_directory.db.database import init_db, close_db
from ndis_directory.services.catalog import ServiceCatalog
from ndis_directory.services.review_service import ReviewService, build_review_store

# Import routers
from ndis_directory.api import health, reviews, services, admin


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info(
        "Starting up NDIS Provider Directory",
        extra={"review_backend": settings.REVIEW_BACKEND},
    )

    store = build_review_store(settings)
    app.state.review_service = ReviewService(store)
    app.state.catalog = ServiceCatalog(settings.SERVICES_FILE)

    if settings.REVIEW_BACKEND == "sql":
        # Startup fails loudly if the database cannot be reached
        await init_db()
        logger.info("Database initialized")

    yield

    logger.info("Shutting down NDIS Provider Directory")
    if settings.REVIEW_BACKEND == "sql":
        await close_db()
        logger.info("Database connections closed")
    elif settings.REVIEW_BACKEND == "hosted":
        await store.close()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="NDIS service provider directory with reviews and ranked search",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(RequestIdMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],  # Including X-Admin-Key
)


def _error_response(status_code: int, code: ErrorCode, message: str, details=None) -> JSONResponse:
    error_response = ErrorResponse(
        request_id=get_request_id(),
        error=ErrorDetail(code=code, message=message, details=details or None),
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(by_alias=True, exclude_none=True),
    )


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """
    Handle all custom application exceptions.

    ValidationError -> 422, NotFoundError -> 404, UnavailableError -> 503,
    UnauthorizedError -> 401.
    """
    logger.warning(
        f"Application exception: {exc.error_code.value}",
        extra={
            "request_id": get_request_id(),
            "error_code": exc.error_code.value,
            "error_message": exc.message,
            "details": exc.details,
        },
    )

    status_code = ERROR_CODE_TO_HTTP_STATUS.get(exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return _error_response(status_code, exc.error_code, exc.message, exc.details)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request body/query validation errors (422).
    """
    error_details = {
        "validation_errors": [
            {
                "field": ".".join(str(loc) for loc in err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
    }

    logger.warning(
        "Validation error",
        extra={"request_id": get_request_id(), "errors": error_details},
    )

    return _error_response(
        ERROR_CODE_TO_HTTP_STATUS[ErrorCode.INVALID_ARGUMENT],
        ErrorCode.INVALID_ARGUMENT,
        "Request validation failed",
        error_details,
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle all uncaught exceptions with a 500 response.
    """
    logger.error(
        f"Uncaught exception: {str(exc)}",
        extra={"request_id": get_request_id(), "exception_type": type(exc).__name__},
        exc_info=True,
    )

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCode.INTERNAL,
        "Internal server error",
        {"error": str(exc)} if settings.DEBUG else None,
    )


# Include routers
app.include_router(health.router)
app.include_router(services.router)
app.include_router(reviews.router)
app.include_router(admin.router)


@app.get("/", include_in_schema=False)
async def root():
    """Service index."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
    }


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "ndis_directory.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
