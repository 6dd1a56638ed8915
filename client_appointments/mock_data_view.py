"""Booking backend routes served from the in-memory mock store."""
from __future__ import annotations

import html
import json
from typing import Any, Dict, Iterable, List, Mapping

from fastapi import APIRouter, Query
from fastapi.responses import HTMLResponse

from client_appointments.config import get_settings
from client_appointments.schemas.appointment import (
    BookingListResponse,
    EditBookingRequest,
    EditBookingResponse,
)
from client_appointments.schemas.service import ServiceListResponse
from client_appointments.services.mock_store import get_mock_store

router = APIRouter()


@router.get("/bookings", response_model=BookingListResponse)
async def list_bookings(page: int = Query(1, ge=1)) -> BookingListResponse:
    store = get_mock_store()
    return await store.bookings.list(page, get_settings().page_size)


@router.post("/bookings/edit", response_model=EditBookingResponse)
async def edit_booking(req: EditBookingRequest) -> EditBookingResponse:
    store = get_mock_store()
    return await store.bookings.edit(req)


@router.get("/services", response_model=ServiceListResponse)
async def list_services() -> ServiceListResponse:
    store = get_mock_store()
    return await store.services.list()


def _stringify(value: Any) -> str:
    """Return a JSON-friendly string representation for table cells."""
    if value is None:
        return ""
    if isinstance(value, (str, int, float, bool)):
        return str(value)
    return json.dumps(value, default=str)


def _build_table(title: str, rows: Iterable[Mapping[str, Any]]) -> str:
    row_list: List[Dict[str, Any]] = [dict(row) for row in rows]
    if not row_list:
        return f"<section><h2>{html.escape(title)}</h2><p>No records found.</p></section>"

    columns: List[str] = []
    for row in row_list:
        for key in row:
            if key not in columns:
                columns.append(key)

    header = "".join(f"<th>{html.escape(column)}</th>" for column in columns)
    body = "".join(
        "<tr>"
        + "".join(f"<td>{html.escape(_stringify(row.get(column)))}</td>" for column in columns)
        + "</tr>"
        for row in row_list
    )
    return (
        f"<section><h2>{html.escape(title)}</h2>"
        f"<table><thead><tr>{header}</tr></thead><tbody>{body}</tbody></table></section>"
    )


@router.get("/mock-data", response_class=HTMLResponse)
async def view_mock_data() -> HTMLResponse:
    """Render the mock services and bookings as HTML tables."""
    store = get_mock_store()
    sections = "".join(
        [
            _build_table(
                "Services",
                ({"id": service.id, "name": service.name} for service in store.services.iter_services()),
            ),
            _build_table("Appointments", store.bookings.records()),
        ]
    )
    html_content = f"""
    <html>
        <head>
            <title>Mock Data Overview</title>
            <style>
                body {{ font-family: Arial, sans-serif; margin: 2rem; }}
                table {{ border-collapse: collapse; width: 100%; }}
                th, td {{ border: 1px solid #ccc; padding: 0.5rem; text-align: left; }}
                th {{ background-color: #f0f0f0; }}
            </style>
        </head>
        <body>
            <h1>Mock Data Overview</h1>
            {sections}
        </body>
    </html>
    """
    return HTMLResponse(content=html_content)

