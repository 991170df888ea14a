from sqlalchemy import Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from movie_catalog.database import Base
from movie_catalog.models.movie import (
    movies_has_actors,
    movies_has_genres,
    movies_has_streaming_platforms,
)


class Genre(Base):
    __tablename__ = "genres"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    image_background = Column(String(255), nullable=True)

    movies = relationship("Movie", secondary=movies_has_genres, back_populates="genres")

    def __repr__(self):
        return f"<Genre(id={self.id}, name='{self.name}')>"


class Actor(Base):
    __tablename__ = "actors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    profile_image = Column(String(255), nullable=True)
    birth_date = Column(Date, nullable=True)
    nationality = Column(String(255), nullable=True)

    movies = relationship("Movie", secondary=movies_has_actors, back_populates="actors")

    def __repr__(self):
        return f"<Actor(id={self.id}, name='{self.name}')>"


class StreamingPlatform(Base):
    __tablename__ = "streaming_platforms"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    logo = Column(String(255), nullable=True)
    website = Column(String(255), nullable=True)

    movies = relationship(
        "Movie", secondary=movies_has_streaming_platforms, back_populates="streaming_platforms"
    )

    def __repr__(self):
        return f"<StreamingPlatform(id={self.id}, name='{self.name}')>"


class Trailer(Base):
    """Trailer owned by a single movie (removed together with it)"""
    __tablename__ = "trailers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    preview = Column(String(255), nullable=False)
    data_480 = Column(String(255), nullable=False)
    data_max = Column(String(255), nullable=False)
    movie_id = Column(Integer, ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True)

    movie = relationship("Movie", back_populates="trailers")

    def __repr__(self):
        return f"<Trailer(id={self.id}, movie_id={self.movie_id})>"
