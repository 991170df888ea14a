"""
Movie filter schemas
Extensible design: add a field here and a predicate in MovieService
"""
from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Optional
from enum import Enum

from movie_catalog.schemas.validation import SafeStringMixin


# ============================================
# Enums for type-safe filter options
# ============================================

class SortOption(str, Enum):
    """Available sort keys for the movie list (rating is the default)"""
    RATING = "rating"
    RELEASED = "released"
    TITLE = "title"


# ============================================
# Filter Set
# ============================================

class MovieFilters(BaseModel, SafeStringMixin):
    """
    Filter Set for one movie list query.

    Every field is optional; an absent field imposes no predicate.
    Inverted rating bounds (min_rating > max_rating) are accepted and
    simply match nothing.
    """
    model_config = ConfigDict(frozen=True)

    title: Optional[str] = Field(None, max_length=200, description="Case-insensitive title substring")
    genre: Optional[int] = Field(None, description="Genre ID (movie must have it)")
    min_rating: Optional[float] = Field(None, description="Minimum rating (inclusive)")
    max_rating: Optional[float] = Field(None, description="Maximum rating (inclusive)")
    year: Optional[int] = Field(None, description="Release year")
    director: Optional[str] = Field(None, max_length=255, description="Director substring")
    platform: Optional[int] = Field(None, description="Streaming platform ID")
    actor: Optional[str] = Field(None, max_length=255, description="Actor name substring")
    min_metacritic: Optional[int] = Field(None, description="Minimum critic score (inclusive)")
    sort: SortOption = Field(default=SortOption.RATING, description="Sort key")

    @field_validator('title', 'director', 'actor')
    @classmethod
    def clean_text(cls, v):
        """Blank text means no filter; scripts are rejected"""
        if v is None:
            return v
        v = v.strip()
        if not v:
            return None
        return cls.validate_no_script(v)

    def is_empty(self) -> bool:
        """True when no predicate would be applied"""
        return not self.model_dump(exclude_none=True, exclude={"sort"})
