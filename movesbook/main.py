import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from movesbook.api.router import api_router
from movesbook.core.config import settings
from movesbook.db.async_session import shutdown_async_database, startup_async_database
from movesbook.services.errors import (
    MovesbookError,
    movesbook_error_handler,
    request_validation_error_handler,
    unhandled_error_handler,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description=settings.PROJECT_DESCRIPTION,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    redoc_url=f"{settings.API_V1_PREFIX}/redoc",
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(MovesbookError, movesbook_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.on_event("startup")
async def startup_event():
    """Initialize services on application startup."""
    try:
        logger.info("Starting up Movesbook API...")
        await startup_async_database()
        logger.info("Movesbook API startup completed successfully")
    except Exception as e:
        logger.error(f"Failed to start up application: {e}")
        raise


@app.on_event("shutdown")
async def shutdown_event():
    """Clean up services on application shutdown."""
    logger.info("Shutting down Movesbook API...")
    await shutdown_async_database()
    logger.info("Movesbook API shutdown completed successfully")


@app.get("/")
async def root():
    return {"status": "ok", "message": "Welcome to Movesbook API"}
