from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
import os

from movie_catalog.database import get_db
from movie_catalog.schemas.auth import UserSignup, UserLogin, UserResponse
from movie_catalog.schemas.movie import MessageResponse
from movie_catalog.services.auth_service import AuthService
from movie_catalog.utils.dependencies import get_current_user
from movie_catalog.utils.security import ACCESS_TOKEN_EXPIRE_MINUTES, AUTH_COOKIE_NAME
from movie_catalog.models.user import User

# Define router
router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def _secure_cookies() -> bool:
    return os.getenv("ENVIRONMENT") == "production"


def set_auth_cookie(response: Response, token: str) -> None:
    """Store the JWT in an httpOnly cookie"""
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=_secure_cookies(),
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


# Register a new user and log them in
@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def signup(user_data: UserSignup, response: Response, db: Session = Depends(get_db)):
    """Register a new user"""
    user = AuthService.register_user(db, user_data)
    set_auth_cookie(response, AuthService.issue_token(user))
    return user


# Login endpoint
@router.post("/login", response_model=UserResponse)
def login(credentials: UserLogin, response: Response, db: Session = Depends(get_db)):
    """Login with email and password; sets the auth cookie"""
    user = AuthService.authenticate(db, credentials)
    set_auth_cookie(response, AuthService.issue_token(user))
    return user


# Get current authenticated user
@router.get("/profile", response_model=UserResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    """Get current authenticated user"""
    return current_user


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response):
    """Clear the auth cookie"""
    response.delete_cookie(
        key=AUTH_COOKIE_NAME,
        httponly=True,
        samesite="lax",
        secure=_secure_cookies(),
    )
    return {"message": "Logged out"}
