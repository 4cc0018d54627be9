# schemas/user.py
"""
Pydantic schemas for authentication and user management.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

from models import Role


class RegisterRequest(BaseModel):
     email: str = Field(..., min_length=3, max_length=255)
     password: str = Field(..., min_length=8, max_length=72)
     name: Optional[str] = Field(None, max_length=200)

     model_config = ConfigDict(str_strip_whitespace=True)


class LoginRequest(BaseModel):
     email: str
     password: str


class UserResponse(BaseModel):
     """A user together with the role from their profile."""
     id: int
     email: str
     name: Optional[str] = None
     role: Role
     created_at: Optional[datetime] = None
     last_login_at: Optional[datetime] = None


class TokenResponse(BaseModel):
     token: str
     user: UserResponse


class UserCreate(BaseModel):
     """Admin: create an account for someone else."""
     email: str = Field(..., min_length=3, max_length=255)
     name: str = Field(..., min_length=1, max_length=200)
     password: str = Field(..., min_length=8, max_length=72)
     role: Role = Role.USER

     model_config = ConfigDict(
          str_strip_whitespace=True,
          json_schema_extra={
               "example": {
                    "email": "inspector@example.com",
                    "name": "Jane Inspector",
                    "password": "initial-password",
                    "role": "user",
               }
          },
     )


class RoleUpdate(BaseModel):
     role: Role


class ProfileUpdate(BaseModel):
     name: Optional[str] = Field(None, max_length=200)


class UserListResponse(BaseModel):
     users: List[UserResponse]
     total: int
