from pydantic import BaseModel, Field, ConfigDict, field_validator
from datetime import date
from typing import Optional, List

from movie_catalog.schemas.validation import SafeStringMixin


# ==================== CATALOG SCHEMAS ====================

class GenreResponse(BaseModel):
    id: int
    name: str
    image_background: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ActorResponse(BaseModel):
    id: int
    name: str
    profile_image: Optional[str] = None
    birth_date: Optional[date] = None
    nationality: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class StreamingPlatformResponse(BaseModel):
    id: int
    name: str
    logo: Optional[str] = None
    website: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class TrailerResponse(BaseModel):
    id: int
    name: str
    preview: str
    data_480: str
    data_max: str

    model_config = ConfigDict(from_attributes=True)


# ==================== MOVIE SCHEMAS ====================

class MovieResponse(BaseModel):
    """Movie representation returned by every movie endpoint"""
    id: int
    title: str
    metacritic: Optional[int] = None
    poster_image: Optional[str] = None
    background_image: Optional[str] = None
    overview: Optional[str] = None
    released: Optional[date] = None
    rating: Optional[float] = None
    runtime: Optional[int] = None
    plot: Optional[str] = None
    director: Optional[str] = None
    genres: List[GenreResponse] = []
    actors: List[ActorResponse] = []
    streaming_platforms: List[StreamingPlatformResponse] = []
    trailers: List[TrailerResponse] = []

    model_config = ConfigDict(from_attributes=True)


class MovieListEnvelope(BaseModel):
    """Paginated list response: ``count`` is the filtered total, not the page length"""
    count: int
    next: Optional[str] = None
    results: List[MovieResponse]


class TrailerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    preview: str = Field(..., min_length=1, max_length=255)
    data_480: str = Field(..., min_length=1, max_length=255)
    data_max: str = Field(..., min_length=1, max_length=255)


class MovieBase(BaseModel, SafeStringMixin):
    """Shared scalar fields of the admin write payloads"""
    metacritic: Optional[int] = Field(None, ge=0, le=100, description="Critic score (0-100)")
    poster_image: Optional[str] = Field(None, max_length=255)
    background_image: Optional[str] = Field(None, max_length=255)
    overview: Optional[str] = Field(None, max_length=5000)
    released: Optional[date] = None
    rating: Optional[float] = Field(None, ge=0, le=10, description="Rating (0-10)")
    runtime: Optional[int] = Field(None, ge=0, le=1000, description="Runtime in minutes")
    plot: Optional[str] = Field(None, max_length=10000)
    director: Optional[str] = Field(None, max_length=255)

    # Association ids; None leaves associations untouched on update
    genre_ids: Optional[List[int]] = None
    actor_ids: Optional[List[int]] = None
    platform_ids: Optional[List[int]] = None
    trailers: Optional[List[TrailerCreate]] = None

    @field_validator('overview', 'plot')
    @classmethod
    def clean_text(cls, v):
        if v is None:
            return v
        return cls.sanitize_html(cls.validate_no_script(v))

    @field_validator('director')
    @classmethod
    def clean_director(cls, v):
        return cls.validate_no_script(v) if v else v


class MovieCreate(MovieBase):
    """Schema for creating a movie (admin)"""
    title: str = Field(..., min_length=1, max_length=255)

    @field_validator('title')
    @classmethod
    def clean_title(cls, v):
        return cls.validate_no_script(v.strip())


class MovieUpdate(MovieBase):
    """Schema for updating a movie (admin); only fields sent are changed"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)

    @field_validator('title')
    @classmethod
    def clean_title(cls, v):
        return cls.validate_no_script(v.strip()) if v else v


class MessageResponse(BaseModel):
    message: str
