"""Pagination of sorted content listings.

A listing is identified by its *root* path.  Page 1 is served at the root
itself; every later page appends the configured suffix::

    route_for_page(1)              -> "/"
    route_for_page(2)              -> "/page/2"
    route_for_page(3, "/tag/vue")  -> "/tag/vue/page/3"

:func:`neighbors` is the only place that derives rel=prev / rel=next targets.
Route generation and page metadata both read from it.
"""

import math
from typing import List, Optional, Sequence

from pageplan.errors import InvalidArgument
from pageplan.models.config import DEFAULT_INDEX_PATH, DEFAULT_PAGE_SUFFIX
from pageplan.models.content import ContentItem
from pageplan.models.page import Neighbors, Page


def count_pages(item_count: int, page_size: int) -> int:
    """Number of pages needed for *item_count* items. Never less than 1."""
    _check_page_size(page_size)
    return max(1, math.ceil(item_count / page_size))


def paginate(items: Sequence[ContentItem], page_size: int) -> List[Page]:
    """Split *items* into consecutive pages of *page_size*.

    An empty sequence still yields one (empty) page so the listing can render.

    Raises:
        InvalidArgument: *page_size* is not a positive integer.
    """
    total_pages = count_pages(len(items), page_size)
    return [
        Page(
            page_number=number,
            items=list(items[(number - 1) * page_size : number * page_size]),
            total_pages=total_pages,
        )
        for number in range(1, total_pages + 1)
    ]


def route_for_page(
    page_number: int,
    root: str = DEFAULT_INDEX_PATH,
    suffix: str = DEFAULT_PAGE_SUFFIX,
    total_pages: Optional[int] = None,
) -> str:
    """Return the path of *page_number* within the listing rooted at *root*.

    Raises:
        InvalidArgument: *page_number* is below 1, or above *total_pages* when given.
    """
    if total_pages is not None:
        _check_page_number(page_number, total_pages)
    elif not isinstance(page_number, int) or page_number < 1:
        raise InvalidArgument(f"page_number must be >= 1, got {page_number!r}")

    if page_number == 1:
        return root
    return root.rstrip("/") + suffix.format(page=page_number)


def neighbors(
    page_number: int,
    total_pages: int,
    root: str = DEFAULT_INDEX_PATH,
    suffix: str = DEFAULT_PAGE_SUFFIX,
) -> Neighbors:
    """Paths of the previous and next page, ``None`` past either end.

    Raises:
        InvalidArgument: *page_number* lies outside ``[1, total_pages]``.
    """
    _check_page_number(page_number, total_pages)
    prev = route_for_page(page_number - 1, root, suffix) if page_number > 1 else None
    next_ = route_for_page(page_number + 1, root, suffix) if page_number < total_pages else None
    return Neighbors(prev=prev, next=next_)


def page_window(current_page: int, total_pages: int, max_displayed: int) -> List[int]:
    """Page numbers a pager widget shows around *current_page*.

    When every page fits, all of them are returned.  Otherwise the first and
    last page are always present and the remaining ``max_displayed - 2`` slots
    form a run centred on *current_page*::

        page_window(4, 10, 5) -> [1, 3, 4, 5, 10]
        page_window(9, 10, 5) -> [1, 7, 8, 9, 10]
    """
    _check_page_number(current_page, total_pages)
    if max_displayed < 3:
        raise InvalidArgument(f"max_displayed must be >= 3, got {max_displayed!r}")

    if max_displayed >= total_pages:
        return list(range(1, total_pages + 1))

    middle = max_displayed - 2
    begin = current_page - middle // 2
    if begin < 2:
        begin = 2
    elif begin > total_pages - middle:
        begin = total_pages - middle
    return [1, *range(begin, begin + middle), total_pages]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _check_page_size(page_size: int) -> None:
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
        raise InvalidArgument(f"page_size must be a positive integer, got {page_size!r}")


def _check_page_number(page_number: int, total_pages: int) -> None:
    if not isinstance(total_pages, int) or total_pages < 1:
        raise InvalidArgument(f"total_pages must be >= 1, got {total_pages!r}")
    if not isinstance(page_number, int) or not 1 <= page_number <= total_pages:
        raise InvalidArgument(
            f"page_number must be within [1, {total_pages}], got {page_number!r}"
        )
