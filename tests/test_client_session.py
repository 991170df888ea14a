import subprocess
import sys
from pathlib import Path

from movie_catalog.client.auth_session import AuthSession
from movie_catalog.client.favorites import FavoritesStore
from movie_catalog.schemas.auth import ROLE_ADMIN
from movie_catalog.schemas.movie import MovieResponse

from factories import create_user


# ==================== AUTH SESSION ====================

def test_login_and_fetch_me(client, db_session):
    create_user(db_session, email="neo@example.com", password="Password123!", username="Neo")
    auth = AuthSession(base_url="http://testserver", session=client)

    assert auth.login("neo@example.com", "Password123!") is True
    assert auth.is_authenticated
    assert auth.user.username == "Neo"
    assert not auth.is_admin
    assert auth.fetch_me().email == "neo@example.com"


def test_login_failure_sets_error(client, db_session):
    create_user(db_session, email="neo@example.com", password="Password123!")
    auth = AuthSession(base_url="http://testserver", session=client)

    assert auth.login("neo@example.com", "wrong") is False
    assert auth.error == "Incorrect email or password"
    assert not auth.is_authenticated

    auth.clear_error()
    assert auth.error is None


def test_signup_does_not_log_in(client, db_session):
    auth = AuthSession(base_url="http://testserver", session=client)

    success, message = auth.signup("Neo", "neo@example.com", "Password123!")

    assert success is True
    assert message
    assert not auth.is_authenticated
    assert auth.fetch_me() is None


def test_signup_with_taken_email_reports_message(client, db_session):
    create_user(db_session, email="neo@example.com")
    auth = AuthSession(base_url="http://testserver", session=client)

    success, message = auth.signup("Neo", "neo@example.com", "Password123!")

    assert success is False
    assert message == "Email already registered"


def test_logout_clears_local_and_server_session(client, db_session):
    create_user(db_session, email="admin@example.com", password="Password123!", role=ROLE_ADMIN)
    auth = AuthSession(base_url="http://testserver", session=client)
    auth.login("admin@example.com", "Password123!")
    assert auth.is_admin

    auth.logout()

    assert auth.user is None
    assert not auth.is_authenticated
    assert auth.fetch_me() is None


def test_client_package_imports_without_the_database_layer():
    code = "import sys, movie_catalog.client; print('movie_catalog.database' in sys.modules)"
    result = subprocess.run(
        [sys.executable, "-c", code],
        cwd=Path(__file__).resolve().parent.parent,
        capture_output=True,
        text=True,
        check=True,
    )

    assert result.stdout.strip() == "False"


# ==================== FAVORITES ====================

def movie(movie_id, title=None):
    return MovieResponse(id=movie_id, title=title or f"Movie {movie_id}")


def test_favorites_keep_insertion_order_and_ignore_duplicates():
    favorites = FavoritesStore()

    favorites.add(movie(3))
    favorites.add(movie(1))
    favorites.add(movie(3, "Duplicate"))

    assert [m.id for m in favorites.favorites] == [3, 1]
    assert favorites.count == 2
    assert favorites.favorites[0].title == "Movie 3"


def test_toggle_and_remove():
    favorites = FavoritesStore()

    assert favorites.toggle(movie(5)) is True
    assert favorites.is_favorite(5)
    assert favorites.toggle(movie(5)) is False
    assert not favorites.has_favorites

    favorites.remove(404)
    assert favorites.count == 0


def test_favorites_persist_to_file(tmp_path):
    path = tmp_path / "favorites.json"
    favorites = FavoritesStore(storage_path=path)
    favorites.add(movie(1))
    favorites.add(movie(2))

    reloaded = FavoritesStore(storage_path=path)

    assert [m.id for m in reloaded.favorites] == [1, 2]

    reloaded.clear()
    assert FavoritesStore(storage_path=path).count == 0


def test_corrupt_favorites_file_starts_empty(tmp_path):
    path = tmp_path / "favorites.json"
    path.write_text("{not json", encoding="utf-8")

    assert FavoritesStore(storage_path=path).count == 0
