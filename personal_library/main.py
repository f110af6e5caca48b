"""
Main application entry point.
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from personal_library import __version__
from personal_library.api.v1.book_endpoints import router as book_router
from personal_library.api.v1.dependencies import (
    get_book_service,
    get_document_store,
    get_read_book_service,
)
from personal_library.api.v1.health_endpoints import router as health_router
from personal_library.api.v1.read_book_endpoints import router as read_book_router
from personal_library.config import get_settings

logger = logging.getLogger(__name__)

INVALID_PAYLOAD = "Invalid request payload"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Connect once at startup; the handle is shared by every request.
    store = get_document_store()
    get_book_service()
    get_read_book_service()
    if not store.ping():
        logger.warning("Document store did not answer the startup ping")
    logger.info("Personal library API ready")
    yield


def create_app() -> FastAPI:
    """Build the FastAPI application with routers, handlers and middleware."""
    app = FastAPI(
        title="Personal Library API",
        description="Catalog of books and reading progress.",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(book_router, tags=["books"])
    app.include_router(read_book_router, tags=["read_books"])
    app.include_router(health_router, tags=["health"])

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.debug(f"Rejected payload for {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": INVALID_PAYLOAD},
        )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({elapsed_ms:.1f} ms)"
        )
        return response

    @app.get("/")
    def read_root():
        """Root endpoint."""
        return {
            "message": "Welcome to the Personal Library API",
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()


def run() -> None:
    """Start the API server with uvicorn."""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(app, host=settings.server_host, port=settings.server_port)


if __name__ == "__main__":
    run()
