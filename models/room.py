# models/room.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from .base import Base


class Room(Base):
     """
     Room model - one room of a handover object with its equipment and condition.
     """
     __tablename__ = "rooms"

     id = Column(Integer, primary_key=True, autoincrement=True)
     object_id = Column(
          Integer,
          ForeignKey("objects.id", ondelete="CASCADE"),
          nullable=False,
          index=True,
     )
     name = Column(String(255), nullable=False)

     # Equipment
     flooring = Column(String(255), nullable=False, default="")
     walls = Column(String(255), nullable=False, default="")
     outlets = Column(Integer, nullable=False, default=0)
     light_switches = Column(Integer, nullable=False, default=0)
     windows = Column(Integer, nullable=False, default=0)
     radiators = Column(Integer, nullable=False, default=0)

     condition = Column(String(100), nullable=False, default="")
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<Room(id={self.id}, object_id={self.object_id}, name='{self.name}')>"
