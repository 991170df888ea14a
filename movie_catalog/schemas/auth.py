from pydantic import BaseModel, EmailStr, Field, ConfigDict
from datetime import datetime
from typing import Optional

# Account roles
ROLE_USER = "user"
ROLE_ADMIN = "admin"


# Schema for user signup
class UserSignup(BaseModel):
    username: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    # Bcrypt only looks at the first 72 bytes
    password: str = Field(..., min_length=6, max_length=72)


# Schema for user login
class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


# Schema for user response (never includes the password hash)
class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    role: str
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)
