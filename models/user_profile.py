# models/user_profile.py
import enum
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base


class Role(str, enum.Enum):
     """Application roles."""
     ADMIN = "admin"
     MANAGER = "manager"
     USER = "user"


class UserProfile(Base):
     """
     UserProfile model - one per user, carries the application role.

     An identity without a profile is treated as a plain user.
     """
     __tablename__ = "user_profiles"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(
          Integer,
          ForeignKey("users.id", ondelete="CASCADE"),
          unique=True,
          nullable=False,
          index=True,
     )
     role = Column(
          Enum(Role, name="user_role", values_callable=lambda e: [m.value for m in e]),
          default=Role.USER,
          nullable=False,
          index=True,
     )
     # Admin who created this user, if any
     created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     user = relationship("User", back_populates="profile", foreign_keys=[user_id])

     def __repr__(self):
          return f"<UserProfile(user_id={self.user_id}, role='{self.role.value}')>"
