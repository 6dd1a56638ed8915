"""Service package public API definitions.

Service implementations are imported lazily on attribute access. The HTTP
client imports ``client_appointments.services.exceptions``, which executes
this module first; importing the implementations eagerly here would pull the
client back in and create a circular import.
"""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

__all__ = [
    "AppointmentsQueryCache",
    "BookingService",
    "EditSession",
    "MutationCoordinator",
    "Pagination",
    "ServiceCatalogLoader",
    "ServiceCatalogService",
]

_SERVICE_MODULES = {
    "AppointmentsQueryCache": "query_cache",
    "BookingService": "bookings",
    "EditSession": "edit_session",
    "MutationCoordinator": "mutation",
    "Pagination": "pagination",
    "ServiceCatalogLoader": "catalog",
    "ServiceCatalogService": "catalog",
}


def __getattr__(name: str) -> Any:
    if name not in _SERVICE_MODULES:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module = import_module(f".{_SERVICE_MODULES[name]}", __name__)
    attr = getattr(module, name)
    globals()[name] = attr
    return attr


if TYPE_CHECKING:  # pragma: no cover - import for static analysis only
    from .bookings import BookingService as BookingService
    from .catalog import ServiceCatalogLoader as ServiceCatalogLoader
    from .catalog import ServiceCatalogService as ServiceCatalogService
    from .edit_session import EditSession as EditSession
    from .mutation import MutationCoordinator as MutationCoordinator
    from .pagination import Pagination as Pagination
    from .query_cache import AppointmentsQueryCache as AppointmentsQueryCache
