"""Seed helpers shared by the test modules"""
from datetime import date

from movie_catalog.models import Actor, Genre, Movie, StreamingPlatform, Trailer, User
from movie_catalog.models.user import ROLE_USER
from movie_catalog.services.auth_service import AuthService
from movie_catalog.utils.security import AUTH_COOKIE_NAME, hash_password


def create_genre(session, name="Action", genre_id=None):
    genre = Genre(id=genre_id, name=name)
    session.add(genre)
    session.commit()
    return genre


def create_platform(session, name="Netflix", platform_id=None):
    platform = StreamingPlatform(id=platform_id, name=name)
    session.add(platform)
    session.commit()
    return platform


def create_actor(session, name="Keanu Reeves"):
    actor = Actor(name=name)
    session.add(actor)
    session.commit()
    return actor


def create_movie(session, title="Movie", rating=None, released=None, genres=(), platforms=(),
                 actors=(), director=None, metacritic=None, trailers=0):
    movie = Movie(
        title=title,
        rating=rating,
        released=released,
        director=director,
        metacritic=metacritic,
        genres=list(genres),
        streaming_platforms=list(platforms),
        actors=list(actors),
    )
    for i in range(trailers):
        movie.trailers.append(
            Trailer(name=f"{title} trailer {i + 1}", preview="p.jpg", data_480="480.mp4", data_max="max.mp4")
        )
    session.add(movie)
    session.commit()
    return movie


def seed_genre_catalog(session, count=45, genre_id=28):
    """``count`` movies tagged with one genre (distinct ratings) plus five untagged ones"""
    genre = create_genre(session, name="Action", genre_id=genre_id)
    for i in range(count):
        create_movie(
            session,
            title=f"Action {i:02d}",
            rating=round(9.9 - i * 0.1, 1),
            released=date(2000 + i % 20, 6, 1),
            genres=[genre],
        )
    for i in range(5):
        create_movie(session, title=f"Drama {i}", rating=5.0)
    return genre


def create_user(session, email="user@example.com", password="Password123!", username="Test User", role=ROLE_USER):
    user = User(email=email, password_hash=hash_password(password), username=username, role=role)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def login_as(client, user):
    """Put a valid auth cookie for ``user`` on the test client"""
    client.cookies.set(AUTH_COOKIE_NAME, AuthService.issue_token(user))
