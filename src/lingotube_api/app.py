"""Main FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lingotube import __version__
from lingotube.core.config import validate_config
from lingotube.service_factory import cleanup_services
from lingotube.utils.logging import get_logger

from .config import get_api_config
from .middleware import setup_middleware
from .api.models.base import HealthResponse
from .exceptions import APIError

logger = get_logger("api.app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Args:
        app: FastAPI application instance
    """
    logger.info("Starting LingoTube API...")
    config = get_api_config()
    logger.info(f"Environment: {config.environment}")
    logger.info(f"Debug mode: {config.debug}")
    validate_config()

    yield

    logger.info("Shutting down LingoTube API...")
    await cleanup_services()


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    config = get_api_config()

    app = FastAPI(
        title=config.title,
        description=config.description,
        version=__version__,
        debug=config.debug,
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None
    )

    setup_middleware(app)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """Liveness probe."""
        return HealthResponse(
            status="healthy",
            message="LingoTube API is running",
            version=__version__
        )

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint."""
        return {
            "message": "LingoTube API",
            "version": __version__,
            "docs": "/docs" if config.debug else "Documentation disabled in production"
        }

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Handle API errors."""
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    from .api.routers import health, transcript, video

    app.include_router(
        health.router,
        prefix="/api/v1",
        tags=["Health"]
    )

    app.include_router(
        transcript.router,
        prefix="/api/v1",
        tags=["Transcript"]
    )

    app.include_router(
        video.router,
        prefix="/api/v1/video",
        tags=["Video"]
    )

    logger.info("FastAPI application created successfully")
    return app


app = create_app()


def main():
    """Run the API with uvicorn."""
    import uvicorn

    config = get_api_config()
    uvicorn.run(
        "lingotube_api.app:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower()
    )


if __name__ == "__main__":
    main()
