from __future__ import annotations

import logging

from pydantic import ValidationError

from client_appointments.clients.backend import BookingBackendClient
from client_appointments.schemas.appointment import (
    BookingListResponse,
    EditBookingRequest,
    EditBookingResponse,
    PageResult,
)
from client_appointments.services.exceptions import ServiceError
from client_appointments.services.mock_store import BookingRepository, get_mock_store
from client_appointments.services.pagination import PAGE_SIZE

logger = logging.getLogger(__name__)


class BookingService:
    """Booking backend operations available to the signed-in client."""

    def __init__(
        self,
        client: BookingBackendClient,
        *,
        repository: BookingRepository | None = None,
        page_size: int = PAGE_SIZE,
    ) -> None:
        self._client = client
        self._repository = repository
        self._page_size = page_size
        if self._client.use_mock_data:
            self._repository = repository or get_mock_store().bookings

    async def get_bookings(self, page: int) -> PageResult:
        logger.info("Fetching appointments page %s", page)
        if self._client.use_mock_data:
            await self._client.simulate_latency()
            if not self._repository:
                raise RuntimeError("Mock booking repository not configured")
            envelope = await self._repository.list(page, self._page_size)
        else:
            try:
                data = await self._client.get("/bookings", params={"page": page})
                envelope = BookingListResponse(**data)
            except ServiceError:
                raise
            except (TypeError, ValidationError) as exc:
                logger.exception("Malformed bookings payload for page %s", page)
                raise ServiceError("Failed to read appointments page", cause=exc) from exc

        if envelope.status != "success" or envelope.data is None:
            raise ServiceError(envelope.message or "Failed to load appointments")
        try:
            return PageResult(
                page=page,
                appointments=envelope.data.appointments,
                total=envelope.data.total,
                page_size=self._page_size,
            )
        except ValidationError as exc:
            logger.exception("Inconsistent bookings page %s", page)
            raise ServiceError("Failed to read appointments page", cause=exc) from exc

    async def edit_booking(self, request: EditBookingRequest) -> EditBookingResponse:
        logger.info("Editing appointment %s", request.appointment_id)
        if self._client.use_mock_data:
            await self._client.simulate_latency()
            if not self._repository:
                raise RuntimeError("Mock booking repository not configured")
            return await self._repository.edit(request)

        try:
            payload = request.model_dump()
            data = await self._client.post("/bookings/edit", payload)
            return EditBookingResponse(**data)
        except ServiceError:
            raise
        except (TypeError, ValidationError) as exc:
            logger.exception("Malformed edit response for %s", request.appointment_id)
            raise ServiceError("Failed to edit appointment", cause=exc) from exc
