# schemas/room.py
"""
Pydantic schemas for rooms.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

from schemas.attachment import AttachmentResponse


class RoomCreate(BaseModel):
     """Schema for adding a room to an object."""
     name: str = Field(..., min_length=1, max_length=255)
     flooring: str = Field("", max_length=255)
     walls: str = Field("", max_length=255)
     outlets: int = Field(0, ge=0)
     light_switches: int = Field(0, ge=0)
     windows: int = Field(0, ge=0)
     radiators: int = Field(0, ge=0)
     condition: str = Field("", max_length=100)

     model_config = ConfigDict(
          str_strip_whitespace=True,
          json_schema_extra={
               "example": {
                    "name": "Kitchen",
                    "flooring": "Tiles",
                    "walls": "Painted",
                    "outlets": 6,
                    "light_switches": 2,
                    "windows": 1,
                    "radiators": 1,
                    "condition": "good",
               }
          },
     )


class RoomUpdate(BaseModel):
     """Schema for a partial room update."""
     name: Optional[str] = Field(None, min_length=1, max_length=255)
     flooring: Optional[str] = Field(None, max_length=255)
     walls: Optional[str] = Field(None, max_length=255)
     outlets: Optional[int] = Field(None, ge=0)
     light_switches: Optional[int] = Field(None, ge=0)
     windows: Optional[int] = Field(None, ge=0)
     radiators: Optional[int] = Field(None, ge=0)
     condition: Optional[str] = Field(None, max_length=100)

     model_config = ConfigDict(str_strip_whitespace=True)


class RoomResponse(BaseModel):
     """Schema for room response."""
     id: int
     object_id: int
     name: str
     flooring: str
     walls: str
     outlets: int
     light_switches: int
     windows: int
     radiators: int
     condition: str
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class RoomWithAttachments(RoomResponse):
     images: List[AttachmentResponse] = []
