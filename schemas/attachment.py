# schemas/attachment.py
"""
Pydantic schemas for image attachments.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from models import AttachmentSection


class UploadTargetResponse(BaseModel):
     """Where the client should PUT the image bytes."""
     storage_id: str
     upload_url: str
     expires_at: datetime


class ObjectAttachmentCreate(BaseModel):
     """Register an uploaded image against an object section."""
     section: AttachmentSection
     storage_id: str = Field(..., min_length=1, max_length=500)
     filename: str = Field(..., min_length=1, max_length=255)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "section": "keys",
                    "storage_id": "0b7c6f4e-1d2a-4c55-9b7e-5c1f2f6e8a11",
                    "filename": "keys.jpg",
               }
          }
     )


class RoomAttachmentCreate(BaseModel):
     """Register an uploaded image against a room."""
     storage_id: str = Field(..., min_length=1, max_length=500)
     filename: str = Field(..., min_length=1, max_length=255)


class AttachmentResponse(BaseModel):
     """
     Schema for attachment response.

     url is None when the blob can no longer be found.
     """
     id: int
     object_id: int
     room_id: Optional[int] = None
     section: Optional[AttachmentSection] = None
     storage_id: str
     filename: str
     created_at: Optional[datetime] = None
     url: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)
