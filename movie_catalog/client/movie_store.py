"""
Accumulated Movie List and its pagination/loading state.
"""
from typing import List, Optional

from movie_catalog.schemas.movie import MovieResponse
from movie_catalog.utils.pagination import DEFAULT_PAGE_SIZE, PageResult

STATUS_LOADING = "loading"
STATUS_ERROR = "error"
STATUS_EMPTY = "empty"
STATUS_READY = "ready"


class MovieListStore:
    """
    Movies fetched so far plus UI state.

    ``apply_page`` replaces the list for page 1 and appends for later pages;
    it does not de-duplicate (the synchronizer never re-applies a page).
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Full reset (e.g. on logout)"""
        self.movies: List[MovieResponse] = []
        self.selected_movie: Optional[MovieResponse] = None

        self.current_page = 1
        self.total_pages = 0
        self.total_results = 0
        self.page_size = DEFAULT_PAGE_SIZE

        self.is_loading = False
        self.is_fetching_more = False
        self.is_loading_details = False

        self.error: Optional[str] = None

    # ==================== LIST ====================

    def apply_page(self, result: PageResult, requested_page: int) -> None:
        if requested_page == 1:
            self.movies = list(result.items)
        else:
            self.movies = self.movies + list(result.items)

        self.current_page = requested_page
        self.total_pages = result.total_pages
        self.total_results = result.total
        self.page_size = result.page_size

        self.error = None
        self.is_loading = False
        self.is_fetching_more = False

    def start_loading(self, requested_page: int) -> None:
        if requested_page > 1:
            self.is_fetching_more = True
        else:
            self.is_loading = True

    def set_error(self, message: str) -> None:
        """Record a failed fetch; the list itself is left untouched"""
        self.error = message
        self.is_loading = False
        self.is_fetching_more = False
        self.is_loading_details = False

    def clear_error(self) -> None:
        self.error = None

    def clear_movies(self) -> None:
        self.movies = []
        self.current_page = 1
        self.total_pages = 0
        self.total_results = 0

    # ==================== DETAILS ====================

    def set_selected_movie(self, movie: Optional[MovieResponse]) -> None:
        self.selected_movie = movie
        self.is_loading_details = False
        self.error = None

    def clear_selected_movie(self) -> None:
        self.selected_movie = None

    def find(self, movie_id: int) -> Optional[MovieResponse]:
        return next((m for m in self.movies if m.id == movie_id), None)

    # ==================== DERIVED ====================

    @property
    def has_more(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def status(self) -> str:
        """
        Exactly one of loading / error / empty / ready, so "no results"
        and "request in flight" are never confused.
        """
        if self.is_loading:
            return STATUS_LOADING
        if self.error:
            return STATUS_ERROR
        if not self.movies:
            return STATUS_EMPTY
        return STATUS_READY
