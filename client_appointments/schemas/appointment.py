from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from client_appointments.services.pagination import total_pages as count_pages


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    UNSPECIFIED = "unspecified"


_KNOWN_STATUSES = {
    status.value: status
    for status in AppointmentStatus
    if status is not AppointmentStatus.UNSPECIFIED
}


def parse_status(raw: Any) -> AppointmentStatus:
    """Map any raw backend value onto the closed status set."""

    if isinstance(raw, AppointmentStatus):
        return raw
    if not isinstance(raw, str):
        return AppointmentStatus.UNSPECIFIED
    return _KNOWN_STATUSES.get(raw.strip().lower(), AppointmentStatus.UNSPECIFIED)


class Appointment(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    appointment_id: str
    service_id: Optional[int] = None
    service_name: str = ""
    appointment_date: str = Field(
        default="", validation_alias=AliasChoices("appointment_date", "date")
    )
    appointment_time: str = Field(
        default="", validation_alias=AliasChoices("appointment_time", "time")
    )
    status: AppointmentStatus = AppointmentStatus.UNSPECIFIED

    @field_validator("appointment_id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("appointment_date", "appointment_time", "service_name", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> AppointmentStatus:
        return parse_status(value)


class StatusBadge(BaseModel):
    status: AppointmentStatus
    tone: str


_STATUS_TONES = {
    AppointmentStatus.CONFIRMED: "success",
    AppointmentStatus.PENDING: "warning",
    AppointmentStatus.COMPLETED: "info",
    AppointmentStatus.CANCELLED: "danger",
    AppointmentStatus.UNSPECIFIED: "neutral",
}


def describe_status(raw: Any) -> StatusBadge:
    status = parse_status(raw)
    return StatusBadge(status=status, tone=_STATUS_TONES[status])


class BookingListData(BaseModel):
    appointments: List[Appointment] = Field(default_factory=list)
    total: int = Field(0, ge=0)


class BookingListResponse(BaseModel):
    status: str
    message: Optional[str] = None
    data: Optional[BookingListData] = None


class PageResult(BaseModel):
    """One page of the client's appointments as returned by the backend."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(..., ge=1)
    appointments: List[Appointment] = Field(default_factory=list)
    total: int = Field(0, ge=0)
    page_size: int = Field(10, ge=1)

    @property
    def total_pages(self) -> int:
        return count_pages(self.total, self.page_size)


class EditBookingRequest(BaseModel):
    appointment_id: str
    appointment_date: str = Field(..., min_length=1)
    appointment_time: str = Field(..., min_length=1)
    service_id: int


class EditBookingResponse(BaseModel):
    status: str
    message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == "success"
