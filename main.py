import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fireguard.config import get_settings
from fireguard.infrastructure.database import engine, initialize_database
from fireguard.infrastructure.scheduler import get_reminder_scheduler
from fireguard.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and start the reminder jobs; stop them on shutdown."""

    settings = get_settings()
    initialize_database()

    scheduler = get_reminder_scheduler() if settings.scheduler_enabled else None
    if scheduler is not None:
        scheduler.start()
    else:
        logger.info("Reminder scheduler disabled")
    try:
        yield
    finally:
        if scheduler is not None:
            scheduler.shutdown()
        engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Fireguard reminders", lifespan=lifespan)

    # The dashboard frontend calls the API from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
