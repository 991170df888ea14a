from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status
import logging

from movie_catalog.models.user import User, ROLE_USER
from movie_catalog.schemas.auth import UserSignup, UserLogin
from movie_catalog.utils.security import hash_password, verify_password, create_access_token

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Incorrect email or password"


class AuthService:
    """Account creation, credential checks and token issuing"""

    @staticmethod
    def register_user(db: Session, user_data: UserSignup) -> User:
        """New accounts always get the plain user role"""
        email = user_data.email.lower()
        if db.query(User.id).filter(User.email == email).first():
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

        user = User(
            username=user_data.username,
            email=email,
            password_hash=hash_password(user_data.password),
            role=ROLE_USER,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")
        db.refresh(user)
        logger.info(f"Registered user {user.id}")
        return user

    @staticmethod
    def authenticate(db: Session, credentials: UserLogin) -> User:
        user = db.query(User).filter(User.email == credentials.email.lower()).first()

        if user is None:
            logger.warning(f"Login failed: no account for {credentials.email}")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

        if not verify_password(credentials.password, user.password_hash):
            logger.warning(f"Login failed: wrong password for {credentials.email}")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

        return user

    @staticmethod
    def issue_token(user: User) -> str:
        """Access token carrying the user's email, id and role"""
        return create_access_token({"sub": user.email, "user_id": user.id, "role": user.role})
