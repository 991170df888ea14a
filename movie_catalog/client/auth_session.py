"""
Client-side authentication state.

The server keeps the JWT in an httpOnly cookie, so the only thing this
class stores is the user it got back; the cookie itself rides along in the
shared ``requests.Session``.
"""
import logging
from typing import Optional, Tuple

import requests
from pydantic import ValidationError as PydanticValidationError

from movie_catalog.client.api import DEFAULT_BASE_URL, build_session, error_detail
from movie_catalog.schemas.auth import ROLE_ADMIN, UserResponse

logger = logging.getLogger(__name__)


class AuthSession:
    """
    login / signup / logout / fetch_me against ``/api/auth``.

    State: ``user``, ``is_authenticated``, ``loading``, ``error``.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, session=None, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else build_session()
        self.timeout = timeout

        self.user: Optional[UserResponse] = None
        self.is_authenticated = False
        self.loading = False
        self.error: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.role == ROLE_ADMIN

    def _post(self, endpoint: str, payload: Optional[dict] = None):
        return self.session.post(f"{self.base_url}{endpoint}", json=payload, timeout=self.timeout)

    def _set_user(self, data) -> None:
        self.user = UserResponse.model_validate(data)
        self.is_authenticated = True

    def _clear_user(self) -> None:
        self.user = None
        self.is_authenticated = False

    def login(self, email: str, password: str) -> bool:
        """Log in; returns True on success, otherwise ``error`` holds the reason"""
        self.loading = True
        self.error = None
        try:
            response = self._post("/api/auth/login", {"email": email, "password": password})
            if response.status_code != 200:
                self.error = error_detail(response, "Login failed")
                self._clear_user()
                return False
            self._set_user(response.json())
            logger.info(f"Logged in as {self.user.email}")
            return True
        except (requests.exceptions.RequestException, ValueError, PydanticValidationError) as e:
            logger.error(f"Login error: {str(e)}")
            self.error = "Login failed"
            self._clear_user()
            return False
        finally:
            self.loading = False

    def signup(self, username: str, email: str, password: str) -> Tuple[bool, str]:
        """
        Create an account without logging in.

        Returns:
            (success, message) where message is shown to the user either way
        """
        self.loading = True
        self.error = None
        try:
            response = self._post(
                "/api/auth/signup",
                {"username": username, "email": email, "password": password},
            )
            if response.status_code != 201:
                self.error = error_detail(response, "Signup failed")
                return False, self.error
            # The server issues a cookie on signup; the user still logs in explicitly
            self.session.cookies.clear()
            return True, "Account created. Please log in."
        except requests.exceptions.RequestException as e:
            logger.error(f"Signup error: {str(e)}")
            self.error = "Signup failed"
            return False, self.error
        finally:
            self.loading = False

    def logout(self) -> None:
        """Ask the server to drop the cookie; local state is cleared regardless"""
        try:
            self._post("/api/auth/logout")
        except requests.exceptions.RequestException as e:
            logger.warning(f"Logout request failed: {str(e)}")
        finally:
            self.session.cookies.clear()
            self._clear_user()
            self.error = None

    def fetch_me(self) -> Optional[UserResponse]:
        """Restore the session from the cookie; None when not logged in"""
        self.loading = True
        try:
            response = self.session.get(f"{self.base_url}/api/auth/profile", timeout=self.timeout)
            if response.status_code != 200:
                self._clear_user()
                return None
            self._set_user(response.json())
            return self.user
        except (requests.exceptions.RequestException, ValueError, PydanticValidationError) as e:
            logger.error(f"Failed to fetch profile: {str(e)}")
            self._clear_user()
            return None
        finally:
            self.loading = False

    def clear_error(self) -> None:
        self.error = None
