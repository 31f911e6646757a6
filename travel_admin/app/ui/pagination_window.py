from __future__ import annotations

from typing import Final, Literal, Union

ELLIPSIS: Final = "dots"

PageWindowEntry = Union[int, Literal["dots"]]


def build_page_window(total_pages: int, active_page: int, siblings: int = 1, boundaries: int = 1) -> list[PageWindowEntry]:
    """Page numbers and ellipsis markers for a pager of constant width.

    The first and last ``boundaries`` pages and ``siblings`` pages around
    ``active_page`` are always shown. A run of two or more hidden pages is
    collapsed into one ``ELLIPSIS``; a single hidden page is shown as its
    number instead.
    """
    if total_pages <= 0:
        return []
    siblings = max(0, siblings)
    boundaries = max(1, boundaries)
    active_page = min(max(1, active_page), total_pages)

    total_page_numbers = siblings * 2 + 3 + boundaries * 2
    if total_page_numbers >= total_pages:
        return list(range(1, total_pages + 1))

    left_sibling = max(active_page - siblings, boundaries)
    right_sibling = min(active_page + siblings, total_pages - boundaries)

    show_left_dots = left_sibling > boundaries + 2
    show_right_dots = right_sibling < total_pages - (boundaries + 1)

    head = list(range(1, boundaries + 1))
    tail = list(range(total_pages - boundaries + 1, total_pages + 1))

    if not show_left_dots and show_right_dots:
        left_count = siblings * 2 + boundaries + 2
        return [*range(1, left_count + 1), ELLIPSIS, *tail]

    if show_left_dots and not show_right_dots:
        right_count = boundaries + 1 + 2 * siblings
        return [*head, ELLIPSIS, *range(total_pages - right_count, total_pages + 1)]

    return [*head, ELLIPSIS, *range(left_sibling, right_sibling + 1), ELLIPSIS, *tail]


class PaginationWindow:
    """Active page plus navigation for a pager; clamps instead of raising."""

    def __init__(self, total_pages: int, active_page: int = 1, siblings: int = 1, boundaries: int = 1) -> None:
        self.siblings = siblings
        self.boundaries = boundaries
        self.total_pages = max(0, total_pages)
        self.active_page = self._clamp(active_page)

    def reset(self, total_pages: int, active_page: int = 1) -> None:
        self.total_pages = max(0, total_pages)
        self.active_page = self._clamp(active_page)

    @property
    def entries(self) -> list[PageWindowEntry]:
        return build_page_window(self.total_pages, self.active_page, self.siblings, self.boundaries)

    @property
    def is_first(self) -> bool:
        return self.active_page <= 1

    @property
    def is_last(self) -> bool:
        return self.active_page >= self.total_pages

    def set_page(self, page: int) -> int:
        self.active_page = self._clamp(page)
        return self.active_page

    def first(self) -> int:
        return self.set_page(1)

    def last(self) -> int:
        return self.set_page(self.total_pages)

    def next(self) -> int:
        return self.set_page(self.active_page + 1)

    def previous(self) -> int:
        return self.set_page(self.active_page - 1)

    def _clamp(self, page: int) -> int:
        if self.total_pages <= 0:
            return 1
        return min(max(1, page), self.total_pages)
