from movie_catalog.client.api import ApiError, ApiNotFoundError, MovieApiClient, build_session
from movie_catalog.client.auth_session import AuthSession
from movie_catalog.client.favorites import FavoritesStore
from movie_catalog.client.movie_store import MovieListStore
from movie_catalog.client.query_state import MovieQuery, MovieQueryState
from movie_catalog.client.sync import MovieQuerySynchronizer

__all__ = [
    "ApiError",
    "ApiNotFoundError",
    "AuthSession",
    "FavoritesStore",
    "MovieApiClient",
    "MovieListStore",
    "MovieQuery",
    "MovieQueryState",
    "MovieQuerySynchronizer",
    "build_session",
]
