from sqlalchemy import Boolean, Column, Date, Float, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship
from movie_catalog.database import Base


# Association tables (many-to-many)
movies_has_genres = Table(
    "movies_has_genres",
    Base.metadata,
    Column("movies_id", Integer, ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
    Column("genres_id", Integer, ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
)

movies_has_actors = Table(
    "movies_has_actors",
    Base.metadata,
    Column("movies_id", Integer, ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
    Column("actors_id", Integer, ForeignKey("actors.id", ondelete="CASCADE"), primary_key=True),
)

movies_has_streaming_platforms = Table(
    "movies_has_streaming_platforms",
    Base.metadata,
    Column("movies_id", Integer, ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "streaming_platforms_id",
        Integer,
        ForeignKey("streaming_platforms.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Movie(Base):
    """
    A catalog movie with its genres, cast, platforms and trailers.

    Attributes:
        rating: Audience rating (0-10)
        metacritic: Critic score (0-100)
        released: Release date, used by the year filter
        is_admin: Stored flag carried over from the catalog data; listing does not filter on it
    """
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    metacritic = Column(Integer, nullable=True)
    poster_image = Column(String(255), nullable=True)
    background_image = Column(String(255), nullable=True)
    overview = Column(Text, nullable=True)
    released = Column(Date, nullable=True, index=True)
    rating = Column(Float, nullable=True, index=True)
    runtime = Column(Integer, nullable=True)
    plot = Column(Text, nullable=True)
    director = Column(String(255), nullable=True)
    is_admin = Column(Boolean, default=False, nullable=False)

    # Relationships
    genres = relationship("Genre", secondary=movies_has_genres, back_populates="movies")
    actors = relationship("Actor", secondary=movies_has_actors, back_populates="movies")
    streaming_platforms = relationship(
        "StreamingPlatform", secondary=movies_has_streaming_platforms, back_populates="movies"
    )
    # Trailers are owned by the movie: deleting a movie deletes its trailers
    trailers = relationship(
        "Trailer",
        back_populates="movie",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Movie(id={self.id}, title='{self.title}')>"
