# File: common/utils/pagination.py

from dataclasses import dataclass
from math import ceil
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from pymongo import ASCENDING, DESCENDING

from common.config.settings import settings
from common.exceptions.base_exception import InvalidPaginationException, InvalidSortException

SortSpec = List[Tuple[str, int]]

SORT_DIRECTIONS = {"asc": ASCENDING, "desc": DESCENDING}


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def take(self) -> int:
        return self.limit

    def total_pages(self, total: int) -> int:
        return ceil(total / self.limit)

    def slice(self, items: List[Any]) -> List[Any]:
        return items[self.skip:self.skip + self.take]


def _coerce_positive_int(value: Union[int, str, None], default: int, label: str) -> int:
    if value is None:
        return default
    # bool is an int subclass
    if isinstance(value, bool):
        raise InvalidPaginationException(detail=f"{label} must be a positive integer.")
    if isinstance(value, str):
        value = value.strip()
        # isdigit also accepts non-ASCII digits such as "²"
        if not (value.isascii() and value.isdigit()):
            raise InvalidPaginationException(detail=f"{label} must be a positive integer.")
        try:
            value = int(value)
        except ValueError:
            # longer than the interpreter int conversion limit
            raise InvalidPaginationException(detail=f"{label} must be a positive integer.")
    if not isinstance(value, int) or value <= 0:
        raise InvalidPaginationException(detail=f"{label} must be a positive integer.")
    return value


def normalize_pagination(page: Union[int, str, None] = None, limit: Union[int, str, None] = None) -> PageRequest:
    """
    Validate raw page/limit input and apply the configured defaults.

    Args:
        page: 1-based page number, ``None`` for the default.
        limit: Page size, ``None`` for the default.

    Returns:
        PageRequest: Validated page request exposing skip/take arithmetic.

    Raises:
        InvalidPaginationException: When either value is non-numeric or not positive.
    """
    return PageRequest(
        page=_coerce_positive_int(page, settings.DEFAULT_PAGE, "page"),
        limit=_coerce_positive_int(limit, settings.DEFAULT_PAGE_LIMIT, "limit"),
    )


def normalize_sort(
    sort_by: Optional[str],
    sort_type: Optional[str],
    allowed_fields: Iterable[str],
    default_field: str = "created_at",
    default_type: str = "desc",
) -> SortSpec:
    """
    Build a deterministic Mongo sort specification.

    The primary key is followed by ``_id`` in the same direction so that
    equal sort values always come back in the same order.
    """
    field = sort_by or default_field
    direction = (sort_type or default_type).lower()

    if field not in set(allowed_fields):
        raise InvalidSortException(detail=f"Cannot sort by '{field}'.")
    if direction not in SORT_DIRECTIONS:
        raise InvalidSortException(detail="sort_type must be 'asc' or 'desc'.")

    order = SORT_DIRECTIONS[direction]
    if field == "_id":
        return [("_id", order)]
    return [(field, order), ("_id", order)]


def paginate_response(
    items: List[Any],
    total: int,
    page_request: PageRequest,
) -> Dict[str, Any]:
    """
    Build a standard pagination response.

    Args:
        items (List[Any]): Results of the requested page.
        total (int): Total number of items matching the filter, before skip/limit.
        page_request (PageRequest): Normalized pagination input.

    Returns:
        Dict[str, Any]: Standardized paginated response.
    """
    return {
        "items": items,
        "meta": {
            "total": total,
            "page": page_request.page,
            "limit": page_request.limit,
            "pages": page_request.total_pages(total),
        }
    }
