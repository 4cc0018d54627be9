# models/user.py
from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from .base import Base


class User(Base):
     """
     User model - central authentication table.
     The role lives on the related UserProfile, not here.
     """
     __tablename__ = "users"

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password = Column(String(255), nullable=False)
     name = Column(String(200), nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     last_login_at = Column(DateTime, nullable=True)

     # Relationships
     profile = relationship(
          "UserProfile",
          back_populates="user",
          uselist=False,
          foreign_keys="UserProfile.user_id",
     )

     @property
     def display_name(self) -> str:
          return self.name or self.email

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}')>"
