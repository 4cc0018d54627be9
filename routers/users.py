# routers/users.py
"""
Authentication and user management routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth import create_access_token, get_current_actor
from database import get_session
from services import Actor, UserService
from schemas.user import (
     LoginRequest,
     ProfileUpdate,
     RegisterRequest,
     RoleUpdate,
     TokenResponse,
     UserCreate,
     UserListResponse,
     UserResponse,
)

router = APIRouter(prefix="/api", tags=["users"])


@router.post(
     "/register",
     response_model=UserResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Sign up"
)
def register_user(body: RegisterRequest, db: Session = Depends(get_session)):
     user = UserService.register(db, body.email, body.password, body.name)
     return UserService.user_view(db, user)


@router.post("/login", response_model=TokenResponse, summary="Sign in")
def login_user(body: LoginRequest, db: Session = Depends(get_session)):
     user = UserService.authenticate(db, body.email, body.password)
     return {"token": create_access_token(user.id), "user": UserService.user_view(db, user)}


@router.get("/users/me", response_model=UserResponse, summary="Current user")
def get_me(db: Session = Depends(get_session), actor: Actor = Depends(get_current_actor)):
     return UserService.current_user(db, actor)


@router.put("/users/me", response_model=UserResponse, summary="Update own profile")
def update_me(
     body: ProfileUpdate,
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor)
):
     user = UserService.update_profile(db, actor, body.name)
     return UserService.user_view(db, user)


@router.get("/users", response_model=UserListResponse, summary="List users (admin)")
def list_users(db: Session = Depends(get_session), actor: Actor = Depends(get_current_actor)):
     users = UserService.list_users(db, actor)
     return UserListResponse(users=users, total=len(users))


@router.post(
     "/users",
     response_model=UserResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create user (admin)"
)
def create_user(
     body: UserCreate,
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor)
):
     user = UserService.create_user(db, actor, body.email, body.name, body.password, body.role)
     return UserService.user_view(db, user)


@router.put("/users/{user_id}/role", response_model=UserResponse, summary="Change role (admin)")
def update_user_role(
     user_id: int,
     body: RoleUpdate,
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor)
):
     user = UserService.update_role(db, actor, user_id, body.role)
     return UserService.user_view(db, user, body.role)


@router.delete(
     "/users/{user_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete user (admin)"
)
def delete_user(
     user_id: int,
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor)
):
     UserService.delete_user(db, actor, user_id)
     return None
