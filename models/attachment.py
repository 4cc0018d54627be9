# models/attachment.py
import enum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum, func
from .base import Base


class AttachmentSection(str, enum.Enum):
     """Object sections an image can illustrate."""
     KEYS = "keys"
     COUNTERS = "counters"
     MISCELLANEOUS = "miscellaneous"


class Attachment(Base):
     """
     Attachment model - an image stored in blob storage.

     Room images carry room_id and no section; object images carry a section
     and no room_id. object_id is always set.
     """
     __tablename__ = "attachments"

     id = Column(Integer, primary_key=True, autoincrement=True)
     object_id = Column(
          Integer,
          ForeignKey("objects.id", ondelete="CASCADE"),
          nullable=False,
          index=True,
     )
     room_id = Column(
          Integer,
          ForeignKey("rooms.id"),
          nullable=True,
          index=True,
     )
     section = Column(
          Enum(AttachmentSection, name="attachment_section", values_callable=lambda e: [m.value for m in e]),
          nullable=True,
     )
     storage_id = Column(String(500), nullable=False)
     filename = Column(String(255), nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<Attachment(id={self.id}, object_id={self.object_id}, room_id={self.room_id})>"
