from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from movie_catalog.database import Base
from movie_catalog.schemas.auth import ROLE_ADMIN, ROLE_USER


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=ROLE_USER)  # New users are plain users
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
