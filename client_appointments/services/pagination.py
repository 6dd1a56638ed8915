"""Page arithmetic for the appointments list.

Pages are 1-based. There is no upper clamp on the selected page: asking for a
page past the last one is legal and simply yields an empty list from the
backend, which the screen renders as an empty state.
"""

from __future__ import annotations

import logging
from typing import List

logger = logging.getLogger(__name__)

PAGE_SIZE = 10


def total_pages(total: int, page_size: int = PAGE_SIZE) -> int:
    if page_size < 1:
        raise ValueError("page_size must be a positive integer")
    if total <= 0:
        return 0
    return -(-total // page_size)


class Pagination:
    """Tracks the selected page and the last known total."""

    def __init__(self, *, page_size: int = PAGE_SIZE) -> None:
        if page_size < 1:
            raise ValueError("page_size must be a positive integer")
        self.page_size = page_size
        self.page = 1
        self.total = 0

    def set_page(self, page: int) -> int:
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise ValueError(f"Page must be an integer >= 1, got {page!r}")
        if page != self.page:
            logger.debug("Switching appointments page %s -> %s", self.page, page)
        self.page = page
        return self.page

    def update_total(self, total: int) -> None:
        self.total = max(int(total), 0)

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.page_size)

    def page_numbers(self) -> List[int]:
        return list(range(1, self.total_pages + 1))

    def is_current(self, page: int) -> bool:
        return page == self.page

    def is_beyond_last(self) -> bool:
        return self.page > self.total_pages
