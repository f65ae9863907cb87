"""Main FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from student_directory.core.container import ServiceContainer, build_container
from student_directory.core.logging import configure_logging
from student_directory.core.settings import Settings, get_settings
from student_directory.features.auth.provider import AuthProvider
from student_directory.features.auth.router import router as auth_router
from student_directory.features.students.router import router as students_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    container: ServiceContainer | None = None,
    auth_provider: AuthProvider | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    A prebuilt container is used as-is and left open on shutdown; otherwise
    one is built from the settings during startup and closed on shutdown.
    """
    settings = settings or (container.settings if container else get_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan context manager.
        Handles startup and shutdown events.
        """
        configure_logging(settings)
        logger.info("Starting %s v%s", settings.app_name, settings.app_version)

        owned: ServiceContainer | None = None
        if getattr(app.state, "container", None) is None:
            owned = await build_container(settings, auth_provider=auth_provider)
            app.state.container = owned
            logger.info("Service container initialized.")

        yield

        logger.info("Shutting down application")
        if owned is not None:
            await owned.close()
            app.state.container = None
            logger.info("Database engines disposed.")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Student directory records and local session cache",
        lifespan=lifespan,
    )
    app.state.container = container

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(students_router, prefix="/api/v1")
    app.include_router(auth_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check() -> dict[str, str]:  # pyright: ignore[reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "student_directory.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info" if not settings.debug else "debug",
    )
