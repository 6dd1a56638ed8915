from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from client_appointments.schemas.appointment import (
    BookingListData,
    BookingListResponse,
    EditBookingRequest,
    EditBookingResponse,
)
from client_appointments.schemas.service import Service, ServiceListResponse


class ServiceCatalogRepository:
    def __init__(self, services: Iterable[Service] | None = None) -> None:
        self._services: Dict[int, Service] = {}
        if services is None:
            self._seed_services()
        else:
            for service in services:
                self._services[service.id] = service

    def _seed_services(self) -> None:
        seeds = [
            (101, "Signature Haircut"),
            (102, "Classic Facial"),
            (103, "Aromatherapy Massage"),
            (104, "Manicure"),
        ]
        for service_id, name in seeds:
            self._services[service_id] = Service(id=service_id, name=name)

    def get(self, service_id: int) -> Optional[Service]:
        return self._services.get(service_id)

    def iter_services(self) -> Iterable[Service]:
        return list(self._services.values())

    async def list(self) -> ServiceListResponse:
        return ServiceListResponse(status="success", data=list(self._services.values()))


class BookingRepository:
    """In-memory stand-in for the client's bookings on the backend."""

    def __init__(self, catalog: ServiceCatalogRepository | None = None) -> None:
        self._counter = itertools.count(1)
        self._catalog = catalog
        self._appointments: Dict[str, Dict[str, object]] = {}
        self._seed_defaults()

    def _seed_defaults(self) -> None:
        seeds = [
            (101, "2025-09-05", "17:00", "confirmed"),
            (102, "2025-09-06", "11:30", "pending"),
            (103, "2025-09-02", "09:15", "completed"),
            (101, "2025-09-06", "09:00", "cancelled"),
        ]
        for service_id, appointment_date, appointment_time, status in seeds:
            self.add(
                service_id=service_id,
                appointment_date=appointment_date,
                appointment_time=appointment_time,
                status=status,
            )

    def _next_id(self) -> str:
        return f"APT-{next(self._counter):05d}"

    def _service_name(self, service_id: int) -> str:
        if self._catalog is None:
            return ""
        service = self._catalog.get(service_id)
        return service.name if service else ""

    def add(
        self,
        *,
        service_id: int,
        appointment_date: str,
        appointment_time: str,
        status: str = "pending",
    ) -> Dict[str, object]:
        appointment_id = self._next_id()
        record = {
            "appointment_id": appointment_id,
            "service_id": service_id,
            "service_name": self._service_name(service_id),
            "appointment_date": appointment_date,
            "appointment_time": appointment_time,
            "status": status,
        }
        self._appointments[appointment_id] = record
        return record

    def clear(self) -> None:
        self._appointments.clear()

    async def get(self, appointment_id: str) -> Optional[Dict[str, object]]:
        record = self._appointments.get(appointment_id)
        return dict(record) if record else None

    def records(self) -> List[Dict[str, object]]:
        return [dict(record) for record in self._appointments.values()]

    async def list(self, page: int, page_size: int) -> BookingListResponse:
        # Backend pages in insertion order; the client orders each page itself.
        records = list(self._appointments.values())
        start = (page - 1) * page_size
        window = records[start : start + page_size]
        return BookingListResponse(
            status="success",
            data=BookingListData(appointments=window, total=len(records)),
        )

    async def edit(self, request: EditBookingRequest) -> EditBookingResponse:
        record = self._appointments.get(request.appointment_id)
        if record is None:
            return EditBookingResponse(status="error", message="Appointment not found")
        if self._catalog is not None and self._catalog.get(request.service_id) is None:
            return EditBookingResponse(status="error", message="Unknown service")

        record.update(
            {
                "service_id": request.service_id,
                "service_name": self._service_name(request.service_id),
                "appointment_date": request.appointment_date,
                "appointment_time": request.appointment_time,
            }
        )
        return EditBookingResponse(status="success", message="Appointment updated")


@dataclass
class MockDataStore:
    services: ServiceCatalogRepository
    bookings: BookingRepository


_mock_store: MockDataStore | None = None


def get_mock_store() -> MockDataStore:
    global _mock_store
    if _mock_store is None:
        services = ServiceCatalogRepository()
        bookings = BookingRepository(services)
        _mock_store = MockDataStore(services=services, bookings=bookings)
    return _mock_store


def reset_mock_store() -> None:
    global _mock_store
    _mock_store = None
