"""
Client-side query state: the current Filter Set plus page.

Search text and structured filters are mutually exclusive: setting search
text discards every structured filter, and setting a structured filter
discards the search text. Any change other than the page resets to page 1.
"""
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from movie_catalog.utils.exceptions import ValidationError
from movie_catalog.utils.pagination import DEFAULT_PAGE_SIZE

# listener(state, page_only)
Listener = Callable[["MovieQueryState", bool], None]


class MovieQuery(BaseModel):
    """Client Filter Set (immutable; every change produces a new instance)"""
    model_config = ConfigDict(frozen=True)

    search_text: Optional[str] = None
    genre_id: Optional[int] = None
    platform_id: Optional[int] = None
    year: Optional[int] = None
    min_rating: Optional[float] = None
    max_rating: Optional[float] = None
    min_metacritic: Optional[int] = None
    director: Optional[str] = None
    actor: Optional[str] = None
    sort_order: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)


# Structured filter field -> API query parameter
FILTER_PARAMS = {
    "genre_id": "genre",
    "platform_id": "platform",
    "year": "year",
    "min_rating": "minRating",
    "max_rating": "maxRating",
    "min_metacritic": "minMetacritic",
    "director": "director",
    "actor": "actor",
}


class MovieQueryState:
    """
    Single-writer holder of the current Filter Set and page.

    Every mutation bumps ``generation`` and notifies subscribers; the
    generation doubles as a request token so responses for an older state
    can be recognized.
    """

    def __init__(self):
        self._filters = MovieQuery()
        self._page = 1
        self._generation = 0
        self._listeners: List[Listener] = []

    @property
    def filters(self) -> MovieQuery:
        return self._filters

    @property
    def page(self) -> int:
        return self._page

    @property
    def generation(self) -> int:
        return self._generation

    # ==================== SUBSCRIPTIONS ====================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, filters: MovieQuery, page: int, page_only: bool = False) -> None:
        self._filters = filters
        self._page = page
        self._generation += 1
        for listener in list(self._listeners):
            listener(self, page_only)

    def _set_filter(self, **changes) -> None:
        # Structured filters never combine with search text
        filters = self._filters.model_copy(update={**changes, "search_text": None})
        self._commit(filters, page=1)

    # ==================== FILTER SETTERS ====================

    def set_genre(self, genre_id: Optional[int]) -> None:
        self._set_filter(genre_id=genre_id)

    def set_platform(self, platform_id: Optional[int]) -> None:
        self._set_filter(platform_id=platform_id)

    def set_year(self, year: Optional[int]) -> None:
        self._set_filter(year=year)

    def set_min_rating(self, min_rating: Optional[float]) -> None:
        self._set_filter(min_rating=min_rating)

    def set_max_rating(self, max_rating: Optional[float]) -> None:
        self._set_filter(max_rating=max_rating)

    def set_min_metacritic(self, min_metacritic: Optional[int]) -> None:
        self._set_filter(min_metacritic=min_metacritic)

    def set_director(self, director: Optional[str]) -> None:
        self._set_filter(director=director or None)

    def set_actor(self, actor: Optional[str]) -> None:
        self._set_filter(actor=actor or None)

    def set_sort_order(self, sort_order: Optional[str]) -> None:
        self._set_filter(sort_order=sort_order or None)

    def set_search_text(self, search_text: Optional[str]) -> None:
        """Replace the whole Filter Set with the search text alone"""
        text = (search_text or "").strip()
        self._commit(MovieQuery(search_text=text or None), page=1)

    def set_page(self, page: int) -> None:
        if not isinstance(page, int) or isinstance(page, bool) or page < 1:
            raise ValidationError(f"Page must be a positive integer, got {page!r}")
        self._commit(self._filters, page=page, page_only=True)

    def reset(self) -> None:
        """Empty Filter Set, page 1"""
        self._commit(MovieQuery(), page=1)

    # ==================== REQUEST PARAMETERS ====================

    def query_params(self, page_size: int = DEFAULT_PAGE_SIZE) -> Dict[str, object]:
        """
        Request parameters for the current state (pure; no side effects).

        Search text is sent as ``title``; structured filters are only sent
        when there is no search text.
        """
        filters = self._filters
        params: Dict[str, object] = {"page": self._page, "page_size": page_size}

        if filters.search_text:
            params["title"] = filters.search_text
            return params

        for field_name, param in FILTER_PARAMS.items():
            value = getattr(filters, field_name)
            if value is not None:
                params[param] = value

        if filters.sort_order:
            params["sort"] = filters.sort_order

        return params
