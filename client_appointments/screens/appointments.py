"""Data model of the "my upcoming appointments" page.

The screen owns no rendering. It wires the pagination, the page cache, the
service catalog, the edit session and the mutation coordinator together and
hands presentation collaborators plain data through :meth:`view`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from pydantic import BaseModel, Field

from client_appointments.schemas.appointment import Appointment, StatusBadge, describe_status
from client_appointments.schemas.service import ServiceOption
from client_appointments.services.bookings import BookingService
from client_appointments.services.catalog import ServiceCatalogLoader
from client_appointments.services.edit_session import EditDraft, EditSession
from client_appointments.services.mutation import MutationCoordinator, MutationOutcome
from client_appointments.services.ordering import order
from client_appointments.services.pagination import Pagination
from client_appointments.services.query_cache import AppointmentsQueryCache, PageQuery

logger = logging.getLogger(__name__)


class AppointmentCard(BaseModel):
    appointment: Appointment
    badge: StatusBadge


class PagerButton(BaseModel):
    page: int
    active: bool = False


class EditModalView(BaseModel):
    visible: bool = False
    draft: Optional[EditDraft] = None
    options: List[ServiceOption] = Field(default_factory=list)
    is_submitting: bool = False
    error: Optional[str] = None
    missing_fields: List[str] = Field(default_factory=list)


class AppointmentsView(BaseModel):
    page: int
    items: List[AppointmentCard] = Field(default_factory=list)
    is_loading: bool = False
    is_fetching: bool = False
    is_previous_data: bool = False
    error: Optional[str] = None
    is_empty: bool = False
    pages: List[PagerButton] = Field(default_factory=list)
    booking_path: str = "/booking"
    details: Optional[AppointmentCard] = None
    edit: EditModalView = Field(default_factory=EditModalView)


def _card(appointment: Appointment) -> AppointmentCard:
    return AppointmentCard(appointment=appointment, badge=describe_status(appointment.status))


class AppointmentsScreen:
    def __init__(
        self,
        bookings: BookingService,
        catalog: ServiceCatalogLoader,
        *,
        cache: AppointmentsQueryCache | None = None,
        session: EditSession | None = None,
        pagination: Pagination | None = None,
        booking_path: str = "/booking",
    ) -> None:
        self.pagination = pagination or Pagination()
        self.cache = cache or AppointmentsQueryCache(bookings.get_bookings)
        self.session = session or EditSession()
        self.catalog = catalog
        self.mutations = MutationCoordinator(bookings, self.cache, self.session)
        self.booking_path = booking_path
        self._details_id: Optional[str] = None

    async def start(self) -> AppointmentsView:
        await asyncio.gather(self.catalog.load(), self.go_to_page(self.pagination.page))
        return self.view()

    async def go_to_page(self, page: int) -> AppointmentsView:
        self.pagination.set_page(page)
        self._details_id = None
        query = await self.cache.get_page(page)
        self._sync_total(query)
        return self.view()

    def appointments(self) -> List[Appointment]:
        query = self.cache.peek(self.pagination.page)
        if query.data is None:
            return []
        return order(query.data.appointments)

    def _find(self, appointment_id: str) -> Appointment:
        for appointment in self.appointments():
            if appointment.appointment_id == appointment_id:
                return appointment
        raise LookupError(f"Appointment {appointment_id!r} is not on the current page")

    def open_edit(self, appointment_id: str) -> EditDraft:
        return self.session.open(self._find(appointment_id))

    def update_draft(self, field: str, value) -> EditDraft:
        return self.session.update(field, value)

    def close_edit(self) -> None:
        self.session.close()

    async def submit_edit(self) -> MutationOutcome:
        outcome = await self.mutations.submit()
        if outcome.succeeded:
            self._sync_total(self.cache.peek(self.pagination.page))
        return outcome

    def show_details(self, appointment_id: str) -> AppointmentCard:
        card = _card(self._find(appointment_id))
        self._details_id = appointment_id
        return card

    def hide_details(self) -> None:
        self._details_id = None

    def _sync_total(self, query: PageQuery) -> None:
        if query.page == self.pagination.page and query.data is not None and not query.is_previous_data:
            self.pagination.update_total(query.data.total)

    def view(self) -> AppointmentsView:
        query = self.cache.peek(self.pagination.page)
        items = [_card(appointment) for appointment in self.appointments()]
        details = next(
            (card for card in items if card.appointment.appointment_id == self._details_id),
            None,
        )
        draft = self.session.draft
        return AppointmentsView(
            page=self.pagination.page,
            items=items,
            is_loading=query.is_loading,
            is_fetching=query.is_fetching,
            is_previous_data=query.is_previous_data,
            error=str(query.error) if query.error else None,
            is_empty=not items and not query.is_loading,
            pages=[
                PagerButton(page=number, active=self.pagination.is_current(number))
                for number in self.pagination.page_numbers()
            ],
            booking_path=self.booking_path,
            details=details,
            edit=EditModalView(
                visible=self.session.visible,
                draft=draft.model_copy() if draft is not None else None,
                options=self.catalog.options(),
                is_submitting=self.mutations.is_submitting,
                error=str(self.session.error) if self.session.error else None,
                missing_fields=list(self.session.missing),
            ),
        )
