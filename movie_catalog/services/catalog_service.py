from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List
import logging

from movie_catalog.models import Actor, Genre, Movie, StreamingPlatform, Trailer
from movie_catalog.utils.exceptions import NotFoundError, QueryExecutionError

logger = logging.getLogger(__name__)


class CatalogService:
    """Read-only lookups used to populate filter choices"""

    @staticmethod
    def _list(db: Session, model) -> list:
        try:
            return db.query(model).order_by(model.name.asc(), model.id.asc()).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list {model.__tablename__}: {str(e)}")
            raise QueryExecutionError(f"Failed to query {model.__tablename__}") from e

    @staticmethod
    def list_genres(db: Session) -> List[Genre]:
        return CatalogService._list(db, Genre)

    @staticmethod
    def list_streaming_platforms(db: Session) -> List[StreamingPlatform]:
        return CatalogService._list(db, StreamingPlatform)

    @staticmethod
    def list_actors(db: Session) -> List[Actor]:
        return CatalogService._list(db, Actor)

    @staticmethod
    def list_trailers(db: Session, movie_id: int) -> List[Trailer]:
        """Trailers of one movie; unknown movie ids are a 404, not an empty list"""
        try:
            exists = db.query(Movie.id).filter(Movie.id == movie_id).first()
            if not exists:
                raise NotFoundError("Movie not found")
            return db.query(Trailer).filter(Trailer.movie_id == movie_id).order_by(Trailer.id).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list trailers for movie {movie_id}: {str(e)}")
            raise QueryExecutionError("Failed to query trailers") from e
