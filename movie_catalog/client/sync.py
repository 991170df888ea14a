"""
Keeps the Accumulated Movie List in step with the query state.

Each fetch captures the query state's generation as a request token; a
response that arrives after the state has moved on is dropped instead of
being merged into a list built for different filters.
"""
import logging
from typing import Optional

from movie_catalog.client.api import ApiError, MovieApiClient
from movie_catalog.client.movie_store import MovieListStore
from movie_catalog.client.query_state import MovieQueryState
from movie_catalog.schemas.movie import MovieResponse
from movie_catalog.utils.pagination import DEFAULT_PAGE_SIZE, PageResult, PaginationRequest

logger = logging.getLogger(__name__)

# update_query keyword -> MovieQueryState setter
_SETTERS = {
    "search_text": "set_search_text",
    "genre_id": "set_genre",
    "platform_id": "set_platform",
    "year": "set_year",
    "min_rating": "set_min_rating",
    "max_rating": "set_max_rating",
    "min_metacritic": "set_min_metacritic",
    "director": "set_director",
    "actor": "set_actor",
    "sort_order": "set_sort_order",
    "page": "set_page",
}


class MovieQuerySynchronizer:
    """
    Fetches pages for the current query and applies them to the store.

    Args:
        api: MovieApiClient (or anything with ``list_movies``/``get_movie``)
        query_state: Shared MovieQueryState
        movie_store: Shared MovieListStore
        page_size: Page size sent with every list request; resolved the way the
            server resolves it (<= 0 becomes the default, > MAX_PAGE_SIZE is capped)
    """

    def __init__(
        self,
        api: MovieApiClient,
        query_state: MovieQueryState,
        movie_store: MovieListStore,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.api = api
        self.query_state = query_state
        self.movie_store = movie_store
        self.page_size = PaginationRequest.from_params(page=1, page_size=page_size).page_size
        self._unsubscribe = query_state.subscribe(self._on_query_change)

    def close(self) -> None:
        self._unsubscribe()

    def _on_query_change(self, state: MovieQueryState, page_only: bool) -> None:
        if not page_only:
            self.movie_store.clear_movies()

    # ==================== LIST ====================

    def fetch(self) -> bool:
        """
        Fetch the page the query state points at.

        Returns:
            True when a page was applied to the store
        """
        state = self.query_state
        token = state.generation
        requested_page = state.page
        params = state.query_params(self.page_size)

        self.movie_store.start_loading(requested_page)

        try:
            envelope = self.api.list_movies(params)
        except ApiError as e:
            if token != state.generation:
                logger.debug(f"Dropping error for stale request (page {requested_page}): {e.message}")
                self._finish_loading(requested_page)
                return False
            logger.error(f"Failed to load movies (page {requested_page}): {e.message}")
            self.movie_store.set_error(e.message)
            return False

        if token != state.generation:
            logger.debug(f"Dropping stale response for page {requested_page}")
            self._finish_loading(requested_page)
            return False

        store = self.movie_store
        if requested_page > 1 and requested_page <= store.current_page:
            logger.debug(f"Page {requested_page} already applied, skipping")
            self._finish_loading(requested_page)
            return False

        result = PageResult(
            items=envelope.results,
            total=envelope.count,
            page=requested_page,
            page_size=self.page_size,
        )
        store.apply_page(result, requested_page)
        return True

    def _finish_loading(self, requested_page: int) -> None:
        """Clear the loading flag set for a request whose result is discarded"""
        if requested_page > 1:
            self.movie_store.is_fetching_more = False
        else:
            self.movie_store.is_loading = False

    def load_more(self) -> bool:
        """Advance to the next page (only when there is one) and fetch it"""
        if not self.movie_store.has_more:
            return False
        self.query_state.set_page(self.movie_store.current_page + 1)
        return self.fetch()

    def update_query(self, **changes) -> bool:
        """
        Apply filter changes, then fetch page 1 of the new query.

        Example:
            sync.update_query(genre_id=28, sort_order="rating")
        """
        unknown = set(changes) - set(_SETTERS)
        if unknown:
            raise TypeError(f"Unknown query fields: {', '.join(sorted(unknown))}")

        for name, value in changes.items():
            getattr(self.query_state, _SETTERS[name])(value)
        return self.fetch()

    def reset(self) -> None:
        self.query_state.reset()
        self.movie_store.reset()

    # ==================== DETAILS ====================

    def select_movie(self, movie_id: int) -> Optional[MovieResponse]:
        """Load one movie into ``selected_movie``; None when it failed"""
        store = self.movie_store
        store.is_loading_details = True
        try:
            movie = self.api.get_movie(movie_id)
        except ApiError as e:
            logger.error(f"Failed to load movie {movie_id}: {e.message}")
            store.set_error(e.message)
            return None
        store.set_selected_movie(movie)
        return movie
