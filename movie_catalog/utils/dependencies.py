from fastapi import Cookie, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import Optional

from movie_catalog.database import get_db
from movie_catalog.utils.security import decode_access_token
from movie_catalog.models.user import User


# Dependency to get the current authenticated user from the auth cookie
async def get_current_user(
    auth_token: Optional[str] = Cookie(None),
    db: Session = Depends(get_db)
) -> User:
    if not auth_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized: no token")

    payload = decode_access_token(auth_token)
    if payload is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized: invalid token")

    user = db.query(User).filter(User.id == payload.get("user_id")).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    return user


# Dependency for admin-only routes
async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden: Admin access required")
    return current_user
