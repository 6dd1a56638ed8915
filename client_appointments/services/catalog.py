from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from pydantic import ValidationError

from client_appointments.clients.backend import BookingBackendClient
from client_appointments.schemas.service import Service, ServiceListResponse, ServiceOption
from client_appointments.services.exceptions import ServiceError
from client_appointments.services.mock_store import ServiceCatalogRepository, get_mock_store

logger = logging.getLogger(__name__)

PLACEHOLDER_LABEL = "Select a service"
NO_SERVICES_LABEL = "No services available"


class ServiceCatalogService:
    """Reads the bookable services from the backend."""

    def __init__(
        self,
        client: BookingBackendClient,
        *,
        repository: ServiceCatalogRepository | None = None,
    ) -> None:
        self._client = client
        self._repository = repository
        if self._client.use_mock_data:
            self._repository = repository or get_mock_store().services

    async def get_services(self) -> List[Service]:
        logger.info("Fetching service catalog")
        if self._client.use_mock_data:
            await self._client.simulate_latency()
            if not self._repository:
                raise RuntimeError("Mock service repository not configured")
            envelope = await self._repository.list()
        else:
            try:
                data = await self._client.get("/services")
                envelope = ServiceListResponse(**data)
            except ServiceError:
                raise
            except (TypeError, ValidationError) as exc:
                logger.exception("Malformed service catalog payload")
                raise ServiceError("Failed to read service catalog", cause=exc) from exc

        if envelope.status != "success":
            raise ServiceError(envelope.message or "Failed to load services")
        return list(envelope.data)


class ServiceCatalogLoader:
    """Loads the service catalog once per session.

    A failed load is logged and leaves the catalog empty; callers never see
    the exception. Concurrent and repeated calls to :meth:`load` share a
    single fetch. ``retry_attempts`` adds that many extra attempts, waiting
    ``retry_backoff * attempt`` seconds before each one.
    """

    def __init__(
        self,
        catalog: ServiceCatalogService,
        *,
        retry_attempts: int = 0,
        retry_backoff: float = 0.5,
    ) -> None:
        self._catalog = catalog
        self._retry_attempts = max(retry_attempts, 0)
        self._retry_backoff = retry_backoff
        self._services: List[Service] = []
        self._task: Optional[asyncio.Task] = None
        self.error: ServiceError | None = None

    @property
    def services(self) -> List[Service]:
        return list(self._services)

    @property
    def loaded(self) -> bool:
        return self._task is not None and self._task.done()

    async def load(self) -> List[Service]:
        if self._task is None:
            self._task = asyncio.ensure_future(self._load_once())
        if not self._task.done():
            await asyncio.shield(self._task)
        return self.services

    async def _load_once(self) -> None:
        for attempt in range(self._retry_attempts + 1):
            if attempt:
                await asyncio.sleep(self._retry_backoff * attempt)
            try:
                self._services = await self._catalog.get_services()
            except ServiceError as exc:
                self.error = exc
                logger.warning(
                    "Failed to load services (attempt %s of %s): %s",
                    attempt + 1,
                    self._retry_attempts + 1,
                    exc,
                )
                continue
            self.error = None
            logger.info("Loaded %s services", len(self._services))
            return

    def options(self) -> List[ServiceOption]:
        if not self._services:
            return [ServiceOption(value="", label=NO_SERVICES_LABEL, disabled=True)]
        options = [ServiceOption(value="", label=PLACEHOLDER_LABEL)]
        options.extend(
            ServiceOption(value=str(service.id), label=service.name)
            for service in self._services
        )
        return options
