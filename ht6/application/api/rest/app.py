import logging
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from ht6.application.api.v1.errors import ErrorResponder, register_error_handlers
from ht6.application.api.v1.routes import health, seasons
from ht6.application.di import create_container
from ht6.config import Config, configure_logging
from ht6.infrastructure.persistence.database import create_tables, is_sqlite
from ht6.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container

    # Local SQLite databases get their schema on startup
    config = await container.get(Config)
    if config.database.auto_create and is_sqlite(config.database.url):
        engine = await container.get(AsyncEngine)
        await create_tables(engine)

    yield

    await container.close()


def create_app(config: Config | None = None, container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application."""
    if config is None:
        # Pydantic Settings populates from env vars at runtime
        config = Config()  # type: ignore[call-arg]

    # Configure logging early
    configure_logging(config.logging)
    logger.info("Starting HT6 server: %s v%s", config.server.name, config.server.version)

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Traces are only exported when a Logfire token is configured
    logfire.configure(
        service_name=config.server.name,
        service_version=config.server.version,
        environment=config.server.env,
        send_to_logfire="if-token-present",
        console=False,
    )
    logfire.instrument_fastapi(app_instance)

    # Error handling first: its middleware has to sit inside the DI middleware
    register_error_handlers(app_instance, ErrorResponder(config))

    # Setup dependency injection
    if container is None:
        container = create_container(config)
    setup_dishka(container, app_instance)

    # Register v1 routes with /api/v1 prefix
    app_instance.include_router(health.router, prefix="/api/v1")
    app_instance.include_router(seasons.router, prefix="/api/v1")

    return app_instance


# Create app instance for uvicorn
app = create_app()
