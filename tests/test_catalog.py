import asyncio
import logging
from unittest.mock import AsyncMock

from client_appointments.clients.backend import BookingBackendClient
from client_appointments.schemas.service import Service
from client_appointments.services.catalog import (
    NO_SERVICES_LABEL,
    PLACEHOLDER_LABEL,
    ServiceCatalogLoader,
    ServiceCatalogService,
)
from client_appointments.services.exceptions import DownstreamServiceError, ServiceError
from tests.conftest import settle

SERVICES = [Service(id=101, name="Signature Haircut"), Service(id=102, name="Classic Facial")]


class StubCatalog:
    def __init__(self, *results) -> None:
        self.get_services = AsyncMock(side_effect=list(results))


def test_load_populates_catalog_and_options() -> None:
    loader = ServiceCatalogLoader(StubCatalog(SERVICES))

    services = asyncio.run(loader.load())

    assert services == SERVICES
    assert loader.loaded is True
    options = loader.options()
    assert [(option.value, option.label, option.disabled) for option in options] == [
        ("", PLACEHOLDER_LABEL, False),
        ("101", "Signature Haircut", False),
        ("102", "Classic Facial", False),
    ]


def test_catalog_is_fetched_once_per_session() -> None:
    catalog = StubCatalog(SERVICES)
    loader = ServiceCatalogLoader(catalog)

    async def scenario():
        await asyncio.gather(loader.load(), loader.load())
        await loader.load()

    asyncio.run(scenario())

    assert catalog.get_services.await_count == 1


def test_failed_load_degrades_to_disabled_option(caplog) -> None:
    catalog = StubCatalog(DownstreamServiceError("Unable to reach booking backend"))
    loader = ServiceCatalogLoader(catalog)

    with caplog.at_level(logging.WARNING, logger="client_appointments.services.catalog"):
        services = asyncio.run(loader.load())

    assert services == []
    assert isinstance(loader.error, ServiceError)
    assert [(option.label, option.disabled) for option in loader.options()] == [
        (NO_SERVICES_LABEL, True)
    ]
    assert "Failed to load services" in caplog.text


def test_failed_load_is_not_retried_by_default() -> None:
    catalog = StubCatalog(ServiceError("boom"), SERVICES)
    loader = ServiceCatalogLoader(catalog)

    async def scenario():
        await loader.load()
        await loader.load()

    asyncio.run(scenario())

    assert catalog.get_services.await_count == 1
    assert loader.services == []


def test_optional_retry_recovers_from_transient_failure() -> None:
    catalog = StubCatalog(ServiceError("boom"), SERVICES)
    loader = ServiceCatalogLoader(catalog, retry_attempts=2, retry_backoff=0)

    services = asyncio.run(loader.load())

    assert services == SERVICES
    assert catalog.get_services.await_count == 2
    assert loader.error is None


def test_loader_is_independent_of_caller_cancellation() -> None:
    release = None

    async def slow_services():
        await release.wait()
        return SERVICES

    catalog = StubCatalog()
    catalog.get_services.side_effect = slow_services
    loader = ServiceCatalogLoader(catalog)

    async def scenario():
        nonlocal release
        release = asyncio.Event()
        waiter = asyncio.ensure_future(loader.load())
        await settle()
        waiter.cancel()
        release.set()
        return await loader.load()

    assert asyncio.run(scenario()) == SERVICES


def test_catalog_service_reads_mock_store() -> None:
    service = ServiceCatalogService(BookingBackendClient(None))

    services = asyncio.run(service.get_services())

    assert {item.name for item in services} >= {"Signature Haircut", "Classic Facial"}
