"""Mock booking backend for local development.

Serves the booking backend contract (``/bookings``, ``/bookings/edit``,
``/services``) from the in-memory mock store, so the client layer can run
against real HTTP with ``CLIENT_APPOINTMENTS_USE_MOCK_DATA=false``.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from client_appointments.config import get_settings
from client_appointments.dependencies.services import get_backend_client_cached
from client_appointments.mock_data_view import router as mock_data_router


def configure_logging() -> None:
    """Ensure application logs use the INFO level by default."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
    else:
        root_logger.setLevel(logging.INFO)


configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    settings_snapshot = settings.model_dump(exclude={"booking_service_token"})
    logger.info("Application settings on startup: %s", settings_snapshot)

    client = get_backend_client_cached()
    logger.info("Application startup complete.")
    try:
        yield
    finally:
        logger.info("Closing booking backend client.")
        await client.close()
        logger.info("Application shutdown complete.")


settings = get_settings()
app = FastAPI(title=settings.app_name, lifespan=lifespan, redirect_slashes=False)

app.include_router(mock_data_router)
