# models/object_assignment.py
from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from .base import Base


class ObjectAssignment(Base):
     """
     ObjectAssignment model - links a handover object to a user who fills it in.
     """
     __tablename__ = "object_assignments"
     __table_args__ = (
          UniqueConstraint("object_id", "user_id", name="uq_object_assignments_object_user"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     object_id = Column(
          Integer,
          ForeignKey("objects.id", ondelete="CASCADE"),
          nullable=False,
          index=True,
     )
     user_id = Column(
          Integer,
          ForeignKey("users.id", ondelete="CASCADE"),
          nullable=False,
          index=True,
     )
     assigned_by = Column(Integer, ForeignKey("users.id"), nullable=True)
     assigned_at = Column(DateTime, server_default=func.now(), nullable=False)

     object = relationship("HandoverObject", back_populates="assignments")
     user = relationship("User", foreign_keys=[user_id])

     def __repr__(self):
          return f"<ObjectAssignment(object_id={self.object_id}, user_id={self.user_id})>"
