from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session
from typing import List, Optional

from movie_catalog.database import get_db
from movie_catalog.models.user import User
from movie_catalog.schemas.movie import (
    MovieCreate,
    MovieUpdate,
    MovieResponse,
    MovieListEnvelope,
    MessageResponse,
    TrailerResponse,
)
from movie_catalog.schemas.search import MovieFilters, SortOption
from movie_catalog.services.catalog_service import CatalogService
from movie_catalog.services.movie_service import MovieService
from movie_catalog.utils.dependencies import require_admin
from movie_catalog.utils.exceptions import ValidationError
from movie_catalog.utils.pagination import PaginationRequest, build_envelope

router = APIRouter(prefix="/api/movies", tags=["Movies"])


# ============================================
# Filtered, paginated list
# ============================================

@router.get("", response_model=MovieListEnvelope)
def list_movies(
    request: Request,
    title: Optional[str] = Query(None, max_length=200, description="Title substring (case-insensitive)"),
    genre: Optional[int] = Query(None, description="Genre ID"),
    min_rating: Optional[float] = Query(None, alias="minRating", description="Minimum rating (inclusive)"),
    max_rating: Optional[float] = Query(None, alias="maxRating", description="Maximum rating (inclusive)"),
    year: Optional[int] = Query(None, description="Release year"),
    director: Optional[str] = Query(None, max_length=255, description="Director substring"),
    platform: Optional[int] = Query(None, description="Streaming platform ID"),
    actor: Optional[str] = Query(None, max_length=255, description="Actor name substring"),
    min_metacritic: Optional[int] = Query(None, alias="minMetacritic", description="Minimum critic score"),
    sort: SortOption = Query(SortOption.RATING, description="Sort key"),
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    page_size: Optional[str] = Query(None, description="Page size (default 20, max 40)"),
    db: Session = Depends(get_db)
):
    """
    List movies matching every given filter, best rated first.

    - **title** / **director** / **actor**: substring matches
    - **genre** / **platform**: movie must have that genre / platform
    - **minRating** / **maxRating**: inclusive bounds
    - **year**: release year
    - **page** / **page_size**: pagination; bad values fall back to defaults

    Returns `{count, next, results}`; `count` is the filtered total.
    """
    try:
        filters = MovieFilters(
            title=title,
            genre=genre,
            min_rating=min_rating,
            max_rating=max_rating,
            year=year,
            director=director,
            platform=platform,
            actor=actor,
            min_metacritic=min_metacritic,
            sort=sort,
        )
    except ValueError as e:
        raise ValidationError(f"Invalid filters: {str(e)}")

    pagination = PaginationRequest.from_params(page, page_size)
    result = MovieService.list_movies(db, filters, pagination)
    return build_envelope(result, str(request.url))


# ============================================
# Admin write path
# ============================================

@router.post("", response_model=MovieResponse, status_code=status.HTTP_201_CREATED)
def create_movie(
    movie_data: MovieCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Create a movie (admin only)"""
    return MovieService.create_movie(db, movie_data)


@router.put("/{movie_id}", response_model=MovieResponse)
def update_movie(
    movie_id: int,
    update_data: MovieUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Update a movie (admin only); omitted fields are left unchanged"""
    return MovieService.update_movie(db, movie_id, update_data)


@router.delete("/{movie_id}", response_model=MessageResponse)
def delete_movie(
    movie_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Delete a movie and its trailers (admin only)"""
    MovieService.delete_movie(db, movie_id)
    return {"message": "Movie deleted successfully"}


# ============================================
# Movie details
# ============================================

@router.get("/{movie_id}/trailers", response_model=List[TrailerResponse])
def get_movie_trailers(movie_id: int, db: Session = Depends(get_db)):
    """Get the trailers of a movie"""
    return CatalogService.list_trailers(db, movie_id)


@router.get("/{movie_id}", response_model=MovieResponse)
def get_movie(movie_id: int, db: Session = Depends(get_db)):
    """Get movie details by ID"""
    return MovieService.get_movie(db, movie_id)
