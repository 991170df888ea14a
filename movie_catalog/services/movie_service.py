from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import func
from datetime import date
from typing import List
import logging

from movie_catalog.models import Movie, Genre, Actor, StreamingPlatform, Trailer
from movie_catalog.schemas.movie import MovieCreate, MovieUpdate
from movie_catalog.schemas.search import MovieFilters, SortOption
from movie_catalog.schemas.validation import escape_like
from movie_catalog.utils.exceptions import NotFoundError, QueryExecutionError, ValidationError
from movie_catalog.utils.pagination import PageResult, PaginationRequest

logger = logging.getLogger(__name__)


def _contains(column, value: str):
    """Case-insensitive substring predicate"""
    return column.ilike(f"%{escape_like(value)}%", escape="\\")


class MovieService:
    """Filtered, paginated movie queries plus the admin write path"""

    @staticmethod
    def build_predicates(filters: MovieFilters) -> list:
        """
        One predicate per present filter field; the caller ANDs them together.
        An empty list matches every movie.
        """
        predicates = []

        if filters.title:
            predicates.append(_contains(Movie.title, filters.title))

        # Semi-joins: a movie matches if any one association equals the filter
        if filters.genre is not None:
            predicates.append(Movie.genres.any(Genre.id == filters.genre))

        if filters.platform is not None:
            predicates.append(Movie.streaming_platforms.any(StreamingPlatform.id == filters.platform))

        if filters.actor:
            predicates.append(Movie.actors.any(_contains(Actor.name, filters.actor)))

        if filters.min_rating is not None:
            predicates.append(Movie.rating >= filters.min_rating)

        if filters.max_rating is not None:
            predicates.append(Movie.rating <= filters.max_rating)

        if filters.min_metacritic is not None:
            predicates.append(Movie.metacritic >= filters.min_metacritic)

        if filters.year is not None:
            # Range over the calendar year; NULL release dates never match
            try:
                start = date(filters.year, 1, 1)
            except ValueError:
                raise ValidationError(f"Invalid release year: {filters.year}")
            predicates.append(Movie.released >= start)
            # The last representable year has no following Jan 1
            if filters.year < date.max.year:
                predicates.append(Movie.released < date(filters.year + 1, 1, 1))

        if filters.director:
            predicates.append(_contains(Movie.director, filters.director))

        return predicates

    @staticmethod
    def ordering(sort: SortOption) -> list:
        """
        ORDER BY clauses for a sort key. NULLs always sort last and ``id``
        breaks ties so pages are deterministic.
        """
        if sort == SortOption.TITLE:
            return [Movie.title.asc(), Movie.id.asc()]
        if sort == SortOption.RELEASED:
            return [Movie.released.is_(None), Movie.released.desc(), Movie.id.asc()]
        return [Movie.rating.is_(None), Movie.rating.desc(), Movie.id.asc()]

    @staticmethod
    def list_movies(db: Session, filters: MovieFilters, pagination: PaginationRequest) -> PageResult:
        """
        Return one page of movies matching every present filter.

        ``total`` counts all matching movies before OFFSET/LIMIT are applied.

        Raises:
            ValidationError: pagination is not a resolved PaginationRequest
            QueryExecutionError: the store round-trip failed
        """
        if not isinstance(pagination, PaginationRequest) or not pagination.is_valid:
            raise ValidationError(f"Invalid pagination: {pagination!r}")
        if not isinstance(filters, MovieFilters):
            raise ValidationError(f"Invalid filters: {filters!r}")

        predicates = MovieService.build_predicates(filters)

        try:
            total = db.query(func.count(Movie.id)).filter(*predicates).scalar() or 0

            movies = (
                db.query(Movie)
                .options(
                    selectinload(Movie.genres),
                    selectinload(Movie.actors),
                    selectinload(Movie.streaming_platforms),
                    selectinload(Movie.trailers),
                )
                .filter(*predicates)
                .order_by(*MovieService.ordering(filters.sort))
                .offset(pagination.offset)
                .limit(pagination.page_size)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Movie list query failed: {str(e)}")
            raise QueryExecutionError("Failed to query movies") from e

        logger.debug(
            f"Movie list page={pagination.page} size={pagination.page_size} "
            f"returned {len(movies)}/{total}"
        )
        return PageResult(items=movies, total=total, page=pagination.page, page_size=pagination.page_size)

    @staticmethod
    def get_movie(db: Session, movie_id: int) -> Movie:
        """Get a single movie by id"""
        try:
            movie = (
                db.query(Movie)
                .options(
                    selectinload(Movie.genres),
                    selectinload(Movie.actors),
                    selectinload(Movie.streaming_platforms),
                    selectinload(Movie.trailers),
                )
                .filter(Movie.id == movie_id)
                .first()
            )
        except SQLAlchemyError as e:
            logger.error(f"Movie lookup failed for id {movie_id}: {str(e)}")
            raise QueryExecutionError("Failed to query movie") from e

        if not movie:
            raise NotFoundError("Movie not found")
        return movie

    # ==================== ADMIN WRITE PATH ====================

    @staticmethod
    def _load_related(db: Session, model, ids: List[int], label: str) -> list:
        """Fetch association rows, failing if any id is unknown"""
        wanted = set(ids)
        if not wanted:
            return []
        rows = db.query(model).filter(model.id.in_(wanted)).all()
        missing = wanted - {row.id for row in rows}
        if missing:
            raise ValidationError(f"Unknown {label} ids: {sorted(missing)}")
        return rows

    @staticmethod
    def _apply_payload(db: Session, movie: Movie, payload, exclude_unset: bool) -> None:
        data = payload.model_dump(
            exclude_unset=exclude_unset,
            exclude={"genre_ids", "actor_ids", "platform_ids", "trailers"},
        )
        for key, value in data.items():
            setattr(movie, key, value)

        if payload.genre_ids is not None:
            movie.genres = MovieService._load_related(db, Genre, payload.genre_ids, "genre")
        if payload.actor_ids is not None:
            movie.actors = MovieService._load_related(db, Actor, payload.actor_ids, "actor")
        if payload.platform_ids is not None:
            movie.streaming_platforms = MovieService._load_related(
                db, StreamingPlatform, payload.platform_ids, "streaming platform"
            )
        if payload.trailers is not None:
            # Replacing the collection deletes orphaned trailers
            movie.trailers = [Trailer(**trailer.model_dump()) for trailer in payload.trailers]

    @staticmethod
    def create_movie(db: Session, movie_data: MovieCreate) -> Movie:
        """Create a movie with its associations"""
        movie = Movie()
        try:
            MovieService._apply_payload(db, movie, movie_data, exclude_unset=False)
            db.add(movie)
            db.commit()
        except ValidationError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to create movie '{movie_data.title}': {str(e)}")
            raise QueryExecutionError("Failed to create movie") from e

        logger.info(f"Created movie {movie.id} '{movie.title}'")
        return MovieService.get_movie(db, movie.id)

    @staticmethod
    def update_movie(db: Session, movie_id: int, update_data: MovieUpdate) -> Movie:
        """Partially update a movie; association lists are replaced when given"""
        movie = MovieService.get_movie(db, movie_id)
        if "title" in update_data.model_fields_set and update_data.title is None:
            raise ValidationError("Title cannot be empty")

        try:
            MovieService._apply_payload(db, movie, update_data, exclude_unset=True)
            db.commit()
        except ValidationError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to update movie {movie_id}: {str(e)}")
            raise QueryExecutionError("Failed to update movie") from e

        return MovieService.get_movie(db, movie_id)

    @staticmethod
    def delete_movie(db: Session, movie_id: int) -> None:
        """Delete a movie; its trailers go with it"""
        movie = MovieService.get_movie(db, movie_id)
        try:
            db.delete(movie)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to delete movie {movie_id}: {str(e)}")
            raise QueryExecutionError("Failed to delete movie") from e
        logger.info(f"Deleted movie {movie_id}")

