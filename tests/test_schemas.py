import pytest
from pydantic import ValidationError

from client_appointments.schemas.appointment import (
    Appointment,
    AppointmentStatus,
    BookingListResponse,
    PageResult,
    describe_status,
    parse_status,
)
from tests.conftest import make_appointment


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("pending", AppointmentStatus.PENDING),
        ("confirmed", AppointmentStatus.CONFIRMED),
        ("completed", AppointmentStatus.COMPLETED),
        ("cancelled", AppointmentStatus.CANCELLED),
        (" Confirmed ", AppointmentStatus.CONFIRMED),
        ("archived", AppointmentStatus.UNSPECIFIED),
        ("", AppointmentStatus.UNSPECIFIED),
        (None, AppointmentStatus.UNSPECIFIED),
        (3, AppointmentStatus.UNSPECIFIED),
    ],
)
def test_parse_status_maps_onto_closed_set(raw, expected) -> None:
    assert parse_status(raw) is expected


def test_unknown_status_on_appointment_is_unspecified() -> None:
    appointment = make_appointment(status="archived")

    assert appointment.status is AppointmentStatus.UNSPECIFIED
    badge = describe_status(appointment.status)
    assert badge.status is AppointmentStatus.UNSPECIFIED
    assert badge.tone == "neutral"


def test_status_badges_have_distinct_tones() -> None:
    tones = {describe_status(status).tone for status in AppointmentStatus}

    assert len(tones) == len(AppointmentStatus)
    assert describe_status("confirmed").tone == "success"
    assert describe_status("cancelled").tone == "danger"


def test_appointment_accepts_short_date_and_time_keys() -> None:
    appointment = Appointment.model_validate(
        {
            "appointment_id": 42,
            "service_id": 101,
            "service_name": "Signature Haircut",
            "date": "2025-09-05",
            "time": "17:00",
            "status": "pending",
        }
    )

    assert appointment.appointment_id == "42"
    assert appointment.appointment_date == "2025-09-05"
    assert appointment.appointment_time == "17:00"
    assert appointment.model_dump()["appointment_date"] == "2025-09-05"


def test_appointment_tolerates_missing_optional_fields() -> None:
    appointment = Appointment.model_validate({"appointment_id": "APT-1", "appointment_date": None})

    assert appointment.appointment_date == ""
    assert appointment.appointment_time == ""
    assert appointment.service_id is None
    assert appointment.status is AppointmentStatus.UNSPECIFIED


def test_appointment_is_read_only() -> None:
    appointment = make_appointment()

    with pytest.raises(ValidationError):
        appointment.appointment_date = "2030-01-01"


def test_page_result_total_pages() -> None:
    assert PageResult(page=1, total=0).total_pages == 0
    assert PageResult(page=1, total=25).total_pages == 3
    with pytest.raises(ValidationError):
        PageResult(page=0, total=1)


def test_booking_list_envelope_parses_nested_appointments() -> None:
    envelope = BookingListResponse.model_validate(
        {
            "status": "success",
            "data": {
                "appointments": [{"appointment_id": "APT-1", "status": "weird"}],
                "total": 11,
            },
        }
    )

    assert envelope.data.total == 11
    assert envelope.data.appointments[0].status is AppointmentStatus.UNSPECIFIED


def test_booking_list_envelope_rejects_negative_total() -> None:
    with pytest.raises(ValidationError):
        BookingListResponse.model_validate(
            {"status": "success", "data": {"appointments": [], "total": -1}}
        )
