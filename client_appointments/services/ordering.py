"""Chronological ordering of appointment records.

Records sort ascending by ``(appointment_date, appointment_time)``. Python's
sort is stable, so records with equal keys keep their original relative
order.

Dates and times come straight from the backend and may be malformed. Each
component of the key is ranked as ``(0, parsed)`` when it parses and
``(1, raw_text)`` when it does not, so malformed values sort after well-formed
ones and compare among themselves by their raw text. Parsed and raw values are
never compared with each other, so ordering cannot raise.
"""

from __future__ import annotations

from datetime import date, time
from typing import Iterable, List, Tuple, Union

from client_appointments.schemas.appointment import Appointment

_ComponentKey = Tuple[int, Union[date, time, str]]


def _date_key(raw: str) -> _ComponentKey:
    try:
        return (0, date.fromisoformat(raw.strip()))
    except (TypeError, ValueError):
        return (1, raw)


def _time_key(raw: str) -> _ComponentKey:
    text = raw.strip()
    try:
        # Wall-clock time only; any UTC offset is dropped.
        parsed = time.fromisoformat(text.removesuffix("Z"))
    except (TypeError, ValueError):
        return (1, raw)
    return (0, parsed.replace(tzinfo=None))


def sort_key(appointment: Appointment) -> Tuple[_ComponentKey, _ComponentKey]:
    return (
        _date_key(appointment.appointment_date),
        _time_key(appointment.appointment_time),
    )


def order(appointments: Iterable[Appointment]) -> List[Appointment]:
    """Return a new list of ``appointments`` in chronological order."""

    return sorted(appointments, key=sort_key)
