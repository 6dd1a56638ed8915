"""Shared test fixtures and helpers."""

import asyncio
import os
import sys
from typing import List, Optional

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from client_appointments.config import get_settings
from client_appointments.schemas.appointment import Appointment, PageResult
from client_appointments.services.exceptions import ServiceError
from client_appointments.services.mock_store import reset_mock_store


@pytest.fixture(autouse=True)
def _reset_store() -> None:
    reset_mock_store()
    get_settings.cache_clear()
    yield
    reset_mock_store()
    get_settings.cache_clear()


def make_appointment(
    appointment_id: str = "APT-00001",
    appointment_date: str = "2025-09-05",
    appointment_time: str = "17:00",
    service_id: Optional[int] = 101,
    status: str = "confirmed",
) -> Appointment:
    return Appointment(
        appointment_id=appointment_id,
        service_id=service_id,
        service_name="Signature Haircut",
        appointment_date=appointment_date,
        appointment_time=appointment_time,
        status=status,
    )


def make_page(page: int, call_number: int = 1, total: int = 30) -> PageResult:
    """Build a page whose records identify the page and the fetch that produced it."""
    return PageResult(
        page=page,
        appointments=[
            make_appointment(appointment_id=f"p{page}-c{call_number}-{index}", appointment_time=f"1{index}:00")
            for index in range(2)
        ],
        total=total,
    )


async def settle(rounds: int = 10) -> None:
    """Let every ready task run until it blocks again."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class FakeFetcher:
    """Page fetcher that records calls and can hold each response until released."""

    def __init__(self, *, hold: bool = False, total: int = 30) -> None:
        self.hold = hold
        self.total = total
        self.calls: List[int] = []
        self.releases: List[asyncio.Event] = []
        self.failures: List[Optional[ServiceError]] = []

    async def __call__(self, page: int) -> PageResult:
        self.calls.append(page)
        call_number = len(self.calls)
        failure = self.failures.pop(0) if self.failures else None
        if self.hold:
            release = asyncio.Event()
            self.releases.append(release)
            await release.wait()
        if failure is not None:
            raise failure
        return make_page(page, call_number, self.total)

    def release(self, index: int) -> None:
        self.releases[index].set()

    def release_all(self) -> None:
        for release in self.releases:
            release.set()
