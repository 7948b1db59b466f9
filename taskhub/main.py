"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI

from .config import Settings
from .container import build_container
from .db import init_db
from .handlers import register_exception_handlers
from .logging_setup import setup_logging
from .routers import auth, categories, tasks

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an explicit settings object."""
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize database on startup."""
        init_db(settings.database_path)
        logger.info("%s started (env=%s)", settings.app_name, settings.env)
        yield

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant task tracking API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.container = build_container(settings)

    register_exception_handlers(app, debug=not settings.is_production)

    app.include_router(auth.router)
    app.include_router(tasks.router)
    app.include_router(categories.router)

    @app.get("/health")
    def health():
        """Liveness check."""
        return {
            "success": True,
            "message": "API is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


def main():
    """Run the application with uvicorn."""
    import uvicorn

    settings = Settings.from_env()
    setup_logging(level=settings.log_level, log_file=settings.log_file)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
