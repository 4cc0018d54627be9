# services/user_service.py
"""
User Service - registration, login and admin user management.

Passwords are bcrypt hashes via passlib; the role lives on UserProfile.
"""
import logging
from typing import Optional

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from models import HandoverObject, ObjectAssignment, Role, User, UserProfile, utcnow
from services.actor import Actor, role_for
from services.errors import InvalidState, NotFound, Unauthenticated, Unauthorized, ValidationFailed

logger = logging.getLogger("handover.users")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def _normalize_email(email: str) -> str:
     return email.strip().lower()


def _require_admin(actor: Actor) -> None:
     if not actor.is_admin:
          raise Unauthorized("Not authorized")


class UserService:
     """Service class for user-related business logic."""

     @staticmethod
     def user_view(db: Session, user: User, role: Optional[Role] = None) -> dict:
          return {
               "id": user.id,
               "email": user.email,
               "name": user.name,
               "role": role or role_for(db, user.id),
               "created_at": user.created_at,
               "last_login_at": user.last_login_at,
          }

     @staticmethod
     def _insert_user(
          db: Session,
          email: str,
          password: str,
          name: Optional[str],
          role: Role,
          created_by: Optional[int] = None,
     ) -> User:
          email = _normalize_email(email)
          if db.query(User).filter(User.email == email).first():
               raise ValidationFailed("User with this email already exists")

          user = User(email=email, password=pwd_context.hash(password), name=name)
          db.add(user)
          db.flush()
          db.add(UserProfile(user_id=user.id, role=role, created_by=created_by))
          db.flush()
          db.refresh(user)
          return user

     @staticmethod
     def register(db: Session, email: str, password: str, name: Optional[str] = None) -> User:
          """Self sign-up. New accounts always start as plain users."""
          user = UserService._insert_user(db, email, password, name, Role.USER)
          logger.info("Registered user %s", user.id)
          return user

     @staticmethod
     def authenticate(db: Session, email: str, password: str) -> User:
          """
          Check credentials and stamp last_login_at.

          Raises:
               Unauthenticated: unknown email or wrong password (same message)
          """
          user = db.query(User).filter(User.email == _normalize_email(email)).first()
          if not user or not pwd_context.verify(password, user.password):
               raise Unauthenticated("Invalid credentials")

          user.last_login_at = utcnow()
          db.flush()
          return user

     @staticmethod
     def current_user(db: Session, actor: Actor) -> dict:
          return UserService.user_view(db, db.get(User, actor.id), actor.role)

     @staticmethod
     def list_users(db: Session, actor: Actor) -> list[dict]:
          _require_admin(actor)
          users = db.query(User).order_by(User.created_at, User.id).all()
          profiles = {p.user_id: p.role for p in db.query(UserProfile).all()}
          return [UserService.user_view(db, u, profiles.get(u.id, Role.USER)) for u in users]

     @staticmethod
     def create_user(
          db: Session,
          actor: Actor,
          email: str,
          name: str,
          password: str,
          role: Role = Role.USER,
     ) -> User:
          """Admin: create an account with an initial password and role."""
          _require_admin(actor)
          user = UserService._insert_user(db, email, password, name, role, created_by=actor.id)
          logger.info("Admin %s created user %s with role %s", actor.id, user.id, role.value)
          return user

     @staticmethod
     def update_role(db: Session, actor: Actor, user_id: int, role: Role) -> User:
          """Admin: change a user's role, creating the profile if it is missing."""
          _require_admin(actor)
          user = db.get(User, user_id)
          if not user:
               raise NotFound(f"User with ID {user_id} not found")

          profile = db.query(UserProfile).filter(UserProfile.user_id == user_id).first()
          if profile:
               profile.role = role
          else:
               db.add(UserProfile(user_id=user_id, role=role))
          db.flush()
          logger.info("Admin %s set role of user %s to %s", actor.id, user_id, role.value)
          return user

     @staticmethod
     def delete_user(db: Session, actor: Actor, user_id: int) -> None:
          """
          Admin: remove a user with their profile and assignments. References
          the user left as creator of profiles or assigner of objects are cleared.

          Users that still own objects cannot be deleted.
          """
          _require_admin(actor)
          if user_id == actor.id:
               raise InvalidState("Cannot delete your own account")

          user = db.get(User, user_id)
          if not user:
               raise NotFound(f"User with ID {user_id} not found")

          owned = db.query(HandoverObject).filter(HandoverObject.created_by == user_id).count()
          if owned:
               raise InvalidState(f"User still owns {owned} object(s)")

          db.query(ObjectAssignment).filter(ObjectAssignment.user_id == user_id).delete(
               synchronize_session="fetch"
          )
          db.query(UserProfile).filter(UserProfile.user_id == user_id).delete(
               synchronize_session="fetch"
          )
          # Audit columns pointing at this user have no ON DELETE action
          db.query(ObjectAssignment).filter(ObjectAssignment.assigned_by == user_id).update(
               {ObjectAssignment.assigned_by: None}, synchronize_session="fetch"
          )
          db.query(UserProfile).filter(UserProfile.created_by == user_id).update(
               {UserProfile.created_by: None}, synchronize_session="fetch"
          )
          db.delete(user)
          db.flush()
          logger.info("Admin %s deleted user %s", actor.id, user_id)

     @staticmethod
     def update_profile(db: Session, actor: Actor, name: Optional[str]) -> User:
          user = db.get(User, actor.id)
          if name is not None:
               user.name = name.strip() or None
          db.flush()
          return user

     @staticmethod
     def bootstrap_admin(db: Session, email: str) -> User:
          """
          One-time setup: promote an existing account to admin.

          Raises:
               InvalidState: an admin already exists
               NotFound: no account with that email
          """
          if db.query(UserProfile).filter(UserProfile.role == Role.ADMIN).first():
               raise InvalidState("An admin already exists")

          user = db.query(User).filter(User.email == _normalize_email(email)).first()
          if not user:
               raise NotFound(f"No user with email {email}")

          profile = db.query(UserProfile).filter(UserProfile.user_id == user.id).first()
          if profile:
               profile.role = Role.ADMIN
          else:
               db.add(UserProfile(user_id=user.id, role=Role.ADMIN))
          db.flush()
          logger.info("Bootstrapped user %s as the first admin", user.id)
          return user
