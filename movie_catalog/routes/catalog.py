from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from movie_catalog.database import get_db
from movie_catalog.schemas.movie import ActorResponse, GenreResponse, StreamingPlatformResponse
from movie_catalog.services.catalog_service import CatalogService

router = APIRouter(prefix="/api", tags=["Catalog"])


@router.get("/genres", response_model=List[GenreResponse])
def get_genres(db: Session = Depends(get_db)):
    """
    Get list of all movie genres

    Used for:
    - Filter dropdowns
    - Genre browsing pages
    """
    return CatalogService.list_genres(db)


@router.get("/streaming-platforms", response_model=List[StreamingPlatformResponse])
def get_streaming_platforms(db: Session = Depends(get_db)):
    """Get list of all streaming platforms"""
    return CatalogService.list_streaming_platforms(db)


@router.get("/actors", response_model=List[ActorResponse])
def get_actors(db: Session = Depends(get_db)):
    """Get list of all actors"""
    return CatalogService.list_actors(db)
