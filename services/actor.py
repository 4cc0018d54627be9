# services/actor.py
"""
Actor resolution: turns an authenticated identity id into an Actor.
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from models import User, UserProfile, Role
from services.errors import Unauthenticated


@dataclass(frozen=True)
class Actor:
     """The authenticated user a request runs as."""
     id: int
     name: str
     email: str
     role: Role

     @property
     def is_admin(self) -> bool:
          return self.role == Role.ADMIN


def role_for(db: Session, user_id: int) -> Role:
     """Role from the user's profile; users without a profile are plain users."""
     profile = db.query(UserProfile).filter(UserProfile.user_id == user_id).first()
     return profile.role if profile else Role.USER


def resolve_actor(db: Session, user_id: Optional[int]) -> Actor:
     """
     Load the actor for an identity id.

     Raises:
          Unauthenticated: no identity, or the identity no longer exists
     """
     if user_id is None:
          raise Unauthenticated("Not authenticated")

     user = db.query(User).filter(User.id == user_id).first()
     if not user:
          raise Unauthenticated("Not authenticated")

     return Actor(
          id=user.id,
          name=user.display_name,
          email=user.email,
          role=role_for(db, user.id),
     )
