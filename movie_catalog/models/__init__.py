"""
Import all models to ensure they are registered with SQLAlchemy
"""
from movie_catalog.models.movie import (
    Movie,
    movies_has_genres,
    movies_has_actors,
    movies_has_streaming_platforms,
)
from movie_catalog.models.catalog import Genre, Actor, StreamingPlatform, Trailer
from movie_catalog.models.user import User

__all__ = [
    "Movie",
    "Genre",
    "Actor",
    "StreamingPlatform",
    "Trailer",
    "User",
    "movies_has_genres",
    "movies_has_actors",
    "movies_has_streaming_platforms",
]
