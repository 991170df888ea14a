"""
Pagination Utilities
====================
Page/page-size resolution, page results and the ``{count, next, results}``
response envelope shared by list endpoints.

Usage:
    pagination = PaginationRequest.from_params(page, page_size)
    result = MovieService.list_movies(db, filters, pagination)
    return build_envelope(result, str(request.url))
"""
from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, TypeVar
import math

from starlette.datastructures import URL

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 40

T = TypeVar("T")


def _to_int(value: Any) -> Optional[int]:
    """Parse an int from a raw query value, None when it is not numeric"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


@dataclass(frozen=True)
class PaginationRequest:
    """A resolved page request: ``page >= 1`` and ``1 <= page_size <= MAX_PAGE_SIZE``"""
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def is_valid(self) -> bool:
        return (
            isinstance(self.page, int)
            and isinstance(self.page_size, int)
            and self.page >= 1
            and 1 <= self.page_size <= MAX_PAGE_SIZE
        )

    @classmethod
    def from_params(cls, page: Any = None, page_size: Any = None) -> "PaginationRequest":
        """
        Resolve raw request values.

        - page: absent, non-numeric or < 1 -> 1
        - page_size: absent, non-numeric or <= 0 -> 20; > 40 -> 40
        """
        resolved_page = _to_int(page)
        if resolved_page is None or resolved_page < 1:
            resolved_page = DEFAULT_PAGE

        resolved_size = _to_int(page_size)
        if resolved_size is None or resolved_size <= 0:
            resolved_size = DEFAULT_PAGE_SIZE
        resolved_size = min(resolved_size, MAX_PAGE_SIZE)

        return cls(page=resolved_page, page_size=resolved_size)


@dataclass
class PageResult(Generic[T]):
    """One bounded slice of a filtered, ordered collection plus its total count"""
    items: List[T] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        if self.total <= 0 or self.page_size <= 0:
            return 0
        return math.ceil(self.total / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def build_envelope(result: PageResult, base_url: str) -> dict:
    """
    Shape a page result as ``{count, next, results}``.

    ``next`` keeps every query parameter of ``base_url`` and pins ``page+1``
    together with the page size used for this page, so following links never
    depends on server defaults. It is None on the last page.
    """
    next_url = None
    if result.has_next:
        next_url = str(
            URL(base_url).include_query_params(page=result.page + 1, page_size=result.page_size)
        )

    return {
        "count": result.total,
        "next": next_url,
        "results": result.items,
    }
