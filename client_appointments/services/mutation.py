from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from client_appointments.schemas.appointment import EditBookingRequest
from client_appointments.services.bookings import BookingService
from client_appointments.services.edit_session import EditDraft, EditSession
from client_appointments.services.exceptions import ServiceError
from client_appointments.services.query_cache import ALL, AppointmentsQueryCache

logger = logging.getLogger(__name__)


class MutationStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    INVALID = "invalid"
    IN_PROGRESS = "in_progress"
    NO_DRAFT = "no_draft"


@dataclass(frozen=True)
class MutationOutcome:
    kind: OutcomeKind
    error: Optional[ServiceError] = None
    missing_fields: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS


class MutationCoordinator:
    """Submits appointment edits one at a time.

    A successful edit closes the edit session it came from, invalidates the
    whole appointments cache and refetches the page currently on screen. A
    failed edit leaves the session open with its draft untouched and records
    the error on it.
    """

    def __init__(
        self,
        bookings: BookingService,
        cache: AppointmentsQueryCache,
        session: EditSession,
    ) -> None:
        self._bookings = bookings
        self._cache = cache
        self._session = session
        self.status = MutationStatus.IDLE
        self.last_outcome: Optional[MutationOutcome] = None

    @property
    def is_submitting(self) -> bool:
        return self.status is MutationStatus.SUBMITTING

    async def submit(self, draft: EditDraft | None = None) -> MutationOutcome:
        if self.is_submitting:
            logger.info("Rejected edit submission: another one is in progress")
            return MutationOutcome(kind=OutcomeKind.IN_PROGRESS)

        draft = draft if draft is not None else self._session.draft
        if draft is None:
            logger.info("Ignored edit submission: no edit session is open")
            return MutationOutcome(kind=OutcomeKind.NO_DRAFT)
        session_id = self._session.session_id if self._session.draft is draft else None

        missing = draft.missing_fields()
        if missing:
            if session_id is not None:
                self._session.fail(session_id, missing=missing)
            outcome = MutationOutcome(kind=OutcomeKind.INVALID, missing_fields=missing)
            self.last_outcome = outcome
            return outcome

        request = draft.to_request()
        self.status = MutationStatus.SUBMITTING
        try:
            outcome = await self._send(request, session_id)
        finally:
            self.status = MutationStatus.IDLE
        self.last_outcome = outcome
        return outcome

    async def _send(self, request: EditBookingRequest, session_id: int | None) -> MutationOutcome:
        try:
            response = await self._bookings.edit_booking(request)
        except ServiceError as exc:
            error = exc
        else:
            error = None
            if not response.succeeded:
                error = ServiceError(response.message or "The appointment could not be updated")

        if error is not None:
            logger.warning("Edit of appointment %s failed: %s", request.appointment_id, error)
            if session_id is not None:
                self._session.fail(session_id, error)
            return MutationOutcome(kind=OutcomeKind.FAILED, error=error)

        logger.info("Appointment %s updated", request.appointment_id)
        if session_id is not None:
            self._session.close(session_id)
        self._cache.invalidate(ALL)
        await self._cache.refetch(self._cache.current_page)
        return MutationOutcome(kind=OutcomeKind.SUCCESS)
