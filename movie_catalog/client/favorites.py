"""
Favorite movies, optionally persisted to a JSON file.
"""
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from movie_catalog.schemas.movie import MovieResponse

logger = logging.getLogger(__name__)


class FavoritesStore:
    """
    Movies marked as favorite, keyed by movie id, in insertion order.

    Args:
        storage_path: JSON file to load from and save to; in-memory only if None
    """

    def __init__(self, storage_path: Optional[Union[str, Path]] = None):
        self.storage_path = Path(storage_path) if storage_path else None
        self._favorites: Dict[int, MovieResponse] = {}
        self._load()

    @property
    def favorites(self) -> List[MovieResponse]:
        return list(self._favorites.values())

    @property
    def count(self) -> int:
        return len(self._favorites)

    @property
    def has_favorites(self) -> bool:
        return bool(self._favorites)

    def is_favorite(self, movie_id: int) -> bool:
        return movie_id in self._favorites

    def add(self, movie: MovieResponse) -> None:
        if movie.id in self._favorites:
            return
        self._favorites[movie.id] = movie
        self._save()

    def remove(self, movie_id: int) -> None:
        if self._favorites.pop(movie_id, None) is not None:
            self._save()

    def toggle(self, movie: MovieResponse) -> bool:
        """Add or remove; returns True when the movie is now a favorite"""
        if self.is_favorite(movie.id):
            self.remove(movie.id)
            return False
        self.add(movie)
        return True

    def clear(self) -> None:
        self._favorites = {}
        self._save()

    # ==================== PERSISTENCE ====================

    def _load(self) -> None:
        if not self.storage_path or not self.storage_path.exists():
            return
        try:
            data = json.loads(self.storage_path.read_text(encoding="utf-8"))
            items = data.get("favorites", []) if isinstance(data, dict) else []
            movies = [MovieResponse.model_validate(item) for item in items]
        except (OSError, ValueError) as e:
            # pydantic's ValidationError is a ValueError
            logger.error(f"Could not read favorites from {self.storage_path}: {str(e)}")
            return
        self._favorites = {movie.id: movie for movie in movies}

    def _save(self) -> None:
        if not self.storage_path:
            return
        payload = {"favorites": [movie.model_dump(mode="json") for movie in self._favorites.values()]}
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        self.storage_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
