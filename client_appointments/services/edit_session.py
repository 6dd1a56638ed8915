from __future__ import annotations

import itertools
import logging
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from client_appointments.schemas.appointment import Appointment, EditBookingRequest
from client_appointments.services.exceptions import ServiceError

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("service_id", "appointment_date", "appointment_time")


class EditDraft(BaseModel):
    """Working copy of an appointment's editable fields."""

    model_config = ConfigDict(validate_assignment=True)

    appointment_id: str = Field(..., frozen=True)
    service_id: Optional[int] = None
    appointment_date: str = ""
    appointment_time: str = ""

    @field_validator("service_id", mode="before")
    @classmethod
    def _blank_service(cls, value: Any) -> Any:
        # The form's placeholder option submits an empty value.
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("appointment_date", "appointment_time", mode="before")
    @classmethod
    def _blank_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def from_appointment(cls, appointment: Appointment) -> "EditDraft":
        return cls(
            appointment_id=appointment.appointment_id,
            service_id=appointment.service_id,
            appointment_date=appointment.appointment_date,
            appointment_time=appointment.appointment_time,
        )

    def missing_fields(self) -> List[str]:
        missing = []
        if self.service_id is None:
            missing.append("service_id")
        if not self.appointment_date.strip():
            missing.append("appointment_date")
        if not self.appointment_time.strip():
            missing.append("appointment_time")
        return missing

    def to_request(self) -> EditBookingRequest:
        return EditBookingRequest(
            appointment_id=self.appointment_id,
            appointment_date=self.appointment_date.strip(),
            appointment_time=self.appointment_time.strip(),
            service_id=self.service_id,
        )


class EditSession:
    """Visibility and draft of the edit modal.

    Every :meth:`open` starts a new session id. Completions that belong to an
    earlier id (for example a submission that finishes after the user closed
    the modal) are ignored, so they can neither reopen the modal nor bring a
    discarded draft back.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self.session_id = 0
        self.visible = False
        self.draft: Optional[EditDraft] = None
        self.error: Optional[ServiceError] = None
        self.missing: List[str] = []

    def open(self, appointment: Appointment) -> EditDraft:
        self.session_id = next(self._ids)
        self.draft = EditDraft.from_appointment(appointment)
        self.visible = True
        self.error = None
        self.missing = []
        logger.debug("Opened edit session %s for %s", self.session_id, appointment.appointment_id)
        return self.draft

    def update(self, field: str, value: Any) -> EditDraft:
        if self.draft is None:
            raise RuntimeError("No edit session is open")
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Field {field!r} is not editable")
        setattr(self.draft, field, value)
        self.error = None
        self.missing = [name for name in self.missing if name != field]
        return self.draft

    def close(self, session_id: int | None = None) -> bool:
        """Discard the draft. With ``session_id``, only if it is still current."""

        if session_id is not None and session_id != self.session_id:
            return False
        if self.visible:
            logger.debug("Closed edit session %s", self.session_id)
        self.visible = False
        self.draft = None
        self.error = None
        self.missing = []
        return True

    def is_current(self, session_id: int) -> bool:
        return self.visible and session_id == self.session_id

    def fail(self, session_id: int, error: ServiceError | None = None, missing: List[str] | None = None) -> None:
        if not self.is_current(session_id):
            return
        self.error = error
        self.missing = list(missing or [])
