from __future__ import annotations

from functools import lru_cache

from client_appointments.clients.backend import BookingBackendClient
from client_appointments.config import Settings, get_settings
from client_appointments.screens.appointments import AppointmentsScreen
from client_appointments.services import (
    BookingService,
    Pagination,
    ServiceCatalogLoader,
    ServiceCatalogService,
)


@lru_cache(maxsize=1)
def get_backend_client_cached() -> BookingBackendClient:
    settings = get_settings()
    return build_backend_client(settings)


def build_backend_client(settings: Settings, **kwargs) -> BookingBackendClient:
    return BookingBackendClient(
        settings.booking_service_base_url,
        timeout=settings.booking_service_timeout,
        use_mock_data=settings.use_mock_data,
        token=settings.booking_service_token,
        **kwargs,
    )


def get_booking_service(
    client: BookingBackendClient | None = None,
    settings: Settings | None = None,
) -> BookingService:
    settings = settings or get_settings()
    return BookingService(
        client or get_backend_client_cached(),
        page_size=settings.page_size,
    )


def get_catalog_loader(
    client: BookingBackendClient | None = None,
    settings: Settings | None = None,
) -> ServiceCatalogLoader:
    settings = settings or get_settings()
    return ServiceCatalogLoader(
        ServiceCatalogService(client or get_backend_client_cached()),
        retry_attempts=settings.catalog_retry_attempts,
        retry_backoff=settings.catalog_retry_backoff,
    )


def build_appointments_screen(
    client: BookingBackendClient | None = None,
    settings: Settings | None = None,
) -> AppointmentsScreen:
    """Wire a fresh screen for one client session."""

    settings = settings or get_settings()
    return AppointmentsScreen(
        get_booking_service(client, settings),
        get_catalog_loader(client, settings),
        pagination=Pagination(page_size=settings.page_size),
        booking_path=settings.booking_creation_path,
    )
