from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bcet_connect.config import get_settings
from bcet_connect.infrastructure.database import engine, initialize_database
from bcet_connect.infrastructure.notifications import DeliveryRegistry, NotificationPublisher
from bcet_connect.interfaces.api.errors import register_exception_handlers
from bcet_connect.interfaces.api.routes import register_routes
from bcet_connect.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and start realtime delivery; tear both down on exit."""

    initialize_database()
    registry: DeliveryRegistry = app.state.delivery_registry
    publisher: NotificationPublisher = app.state.notification_publisher
    registry.init()
    logger.info("BCET Connect API started")
    try:
        yield
    finally:
        await publisher.drain()
        await registry.shutdown()
        engine.dispose()
        logger.info("BCET Connect API stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="BCET Connect API", lifespan=lifespan)

    registry = DeliveryRegistry()
    app.state.delivery_registry = registry
    app.state.notification_publisher = NotificationPublisher(registry)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    register_routes(app)
    return app


app = create_app()
