# models/handover_object.py
import enum
from sqlalchemy import (
     Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Enum, JSON,
     CheckConstraint, func,
)
from sqlalchemy.orm import relationship
from .base import Base


class ObjectStatus(str, enum.Enum):
     """Lifecycle status of a handover object."""
     DRAFT = "draft"
     ASSIGNED = "assigned"
     COMPLETED = "completed"
     RELEASED = "released"


class HandoverObject(Base):
     """
     HandoverObject model - a property being handed over.

     Holds the address, the form content filled in by the assignee
     (parties, keys, counters, notes, signature) and the lifecycle state.
     Rooms and attachments live in their own tables.
     """
     __tablename__ = "objects"
     __table_args__ = (
          CheckConstraint(
               "(status = 'released' AND is_released = 1) OR "
               "(status <> 'released' AND is_released = 0)",
               name="ck_objects_released_in_sync",
          ),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Address
     name = Column(String(255), nullable=False, index=True)
     street = Column(String(255), nullable=False)
     postal_code = Column(String(20), nullable=False)
     city = Column(String(100), nullable=False)
     address_supplement = Column(String(255), nullable=True)
     room = Column(String(100), nullable=True)
     floor = Column(String(100), nullable=True)

     # Ownership
     created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

     # Lifecycle
     status = Column(
          Enum(ObjectStatus, name="object_status", values_callable=lambda e: [m.value for m in e]),
          default=ObjectStatus.DRAFT,
          nullable=False,
          index=True,
     )
     is_released = Column(Boolean, default=False, nullable=False)

     # Form content
     parties = Column(JSON, nullable=False, default=list)
     keys = Column(JSON, nullable=False, default=list)
     counters = Column(JSON, nullable=False, default=list)
     miscellaneous = Column(Text, nullable=True)
     notes = Column(Text, nullable=True)
     signature = Column(Text, nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     assigned_at = Column(DateTime, nullable=True)
     completed_at = Column(DateTime, nullable=True)
     released_at = Column(DateTime, nullable=True)

     # Relationships
     creator = relationship("User", foreign_keys=[created_by])
     assignments = relationship(
          "ObjectAssignment",
          back_populates="object",
          cascade="all, delete-orphan",
          lazy="selectin",
          order_by="ObjectAssignment.id",
     )

     @property
     def assigned_user_ids(self) -> list[int]:
          return [a.user_id for a in self.assignments]

     def __repr__(self):
          return f"<HandoverObject(id={self.id}, name='{self.name}', status='{self.status.value}')>"
