"""
HTTP client for the Movie Catalog API.

GET responses are cached per endpoint + params for ``stale_time`` seconds;
transport retries (5xx, connection errors) are handled by urllib3's Retry
mounted on the session, so callers never retry themselves.
"""
import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import TypeAdapter, ValidationError as PydanticValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from movie_catalog.schemas.movie import (
    GenreResponse,
    MovieListEnvelope,
    MovieResponse,
    StreamingPlatformResponse,
    TrailerResponse,
)
from movie_catalog.utils.cache import ResponseCache

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"


class ApiError(Exception):
    """A request to the catalog API failed; ``message`` is safe to show users"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiNotFoundError(ApiError):
    pass


def error_detail(response, fallback: str) -> str:
    """Pull the ``detail``/``message`` field out of an error response"""
    try:
        body = response.json()
    except ValueError:
        return fallback
    if not isinstance(body, dict):
        return fallback
    detail = body.get("detail") or body.get("message")
    if isinstance(detail, list):
        # FastAPI request validation errors
        return "; ".join(str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail)
    return str(detail) if detail else fallback


def build_session(retries: int = 2, backoff_factor: float = 1.0) -> requests.Session:
    """Session with exponential-backoff retries on idempotent requests"""
    session = requests.Session()
    retry = Retry(
        total=retries,
        backoff_factor=backoff_factor,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=frozenset({"GET"}),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


class MovieApiClient:
    """
    Typed access to the movie endpoints.

    Args:
        base_url: API root, e.g. ``http://localhost:8000``
        session: requests.Session (or compatible); built with retries if omitted
        cache: ResponseCache for GET responses; a private one is created if omitted
        stale_time: Seconds a cached response stays fresh
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session=None,
        cache: Optional[ResponseCache] = None,
        stale_time: int = 300,
        timeout: int = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else build_session()
        self.cache = cache if cache is not None else ResponseCache(max_size=200, stale_time=stale_time)
        self.stale_time = stale_time
        self.timeout = timeout

    def _get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET an endpoint and return its JSON body.

        Raises:
            ApiNotFoundError: 404
            ApiError: any other failure (network, non-2xx, non-JSON body)
        """
        params = {k: v for k, v in (params or {}).items() if v is not None}
        cache_key = self.cache.make_key(endpoint, params)

        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for {endpoint}")
            return cached

        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Catalog API error for {endpoint}: {str(e)}")
            raise ApiError(f"Could not reach the movie service: {str(e)}") from e

        if response.status_code == 404:
            raise ApiNotFoundError(error_detail(response, "Not found"), 404)
        if response.status_code >= 400:
            message = error_detail(response, f"HTTP error! status: {response.status_code}")
            logger.error(f"Catalog API error for {endpoint}: {response.status_code} {message}")
            raise ApiError(message, response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ApiError("Malformed response from the movie service", response.status_code) from e

        self.cache.set(cache_key, data, ttl=self.stale_time)
        return data

    @staticmethod
    def _parse(adapter_type, data: Any, what: str):
        try:
            return TypeAdapter(adapter_type).validate_python(data)
        except PydanticValidationError as e:
            logger.error(f"Unexpected {what} payload: {str(e)}")
            raise ApiError(f"Malformed {what} response") from e

    def list_movies(self, params: Optional[Dict[str, Any]] = None) -> MovieListEnvelope:
        """GET /api/movies with filter/pagination params"""
        return self._parse(MovieListEnvelope, self._get("/api/movies", params), "movie list")

    def get_movie(self, movie_id: int) -> MovieResponse:
        return self._parse(MovieResponse, self._get(f"/api/movies/{movie_id}"), "movie")

    def get_trailers(self, movie_id: int) -> List[TrailerResponse]:
        return self._parse(List[TrailerResponse], self._get(f"/api/movies/{movie_id}/trailers"), "trailer list")

    def get_genres(self) -> List[GenreResponse]:
        return self._parse(List[GenreResponse], self._get("/api/genres"), "genre list")

    def get_streaming_platforms(self) -> List[StreamingPlatformResponse]:
        return self._parse(
            List[StreamingPlatformResponse], self._get("/api/streaming-platforms"), "streaming platform list"
        )

    def invalidate(self) -> None:
        """Drop every cached response (e.g. after an admin write)"""
        self.cache.invalidate()
