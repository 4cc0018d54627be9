# schemas/object.py
"""
Pydantic schemas for handover object request/response validation.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

from models import ObjectStatus
from schemas.room import RoomWithAttachments
from schemas.attachment import AttachmentResponse


class Party(BaseModel):
     """A person involved in the handover (landlord, tenant, caretaker...)."""
     name: str = Field(..., max_length=200)
     function: str = Field("", max_length=200)
     address: str = Field("", max_length=500)
     phone: str = Field("", max_length=50)
     email: str = Field("", max_length=255)


class KeyEntry(BaseModel):
     """Keys handed over, by type."""
     type: str = Field(..., min_length=1, max_length=100)
     quantity: int = Field(..., ge=0)


class CounterEntry(BaseModel):
     """A meter and its reading at handover."""
     number: str = Field(..., min_length=1, max_length=100)
     current_reading: float = Field(..., ge=0)


class ObjectCreate(BaseModel):
     """Schema for creating a handover object."""
     name: str = Field(..., min_length=1, max_length=255)
     street: str = Field(..., min_length=1, max_length=255)
     postal_code: str = Field(..., min_length=1, max_length=20)
     city: str = Field(..., min_length=1, max_length=100)
     address_supplement: Optional[str] = Field(None, max_length=255)
     room: Optional[str] = Field(None, max_length=100)
     floor: Optional[str] = Field(None, max_length=100)

     parties: List[Party] = Field(default_factory=list)
     keys: List[KeyEntry] = Field(default_factory=list)
     counters: List[CounterEntry] = Field(default_factory=list)
     miscellaneous: Optional[str] = None
     notes: Optional[str] = None

     assigned_users: List[int] = Field(default_factory=list, description="User IDs to assign")

     model_config = ConfigDict(
          str_strip_whitespace=True,
          json_schema_extra={
               "example": {
                    "name": "Apartment 3B",
                    "street": "Hauptstrasse 12",
                    "postal_code": "10115",
                    "city": "Berlin",
                    "floor": "3",
                    "assigned_users": [4],
               }
          },
     )


class ObjectUpdate(BaseModel):
     """
     Schema for a partial object update.

     Only fields present in the request body are written.
     """
     name: Optional[str] = Field(None, min_length=1, max_length=255)
     street: Optional[str] = Field(None, min_length=1, max_length=255)
     postal_code: Optional[str] = Field(None, min_length=1, max_length=20)
     city: Optional[str] = Field(None, min_length=1, max_length=100)
     address_supplement: Optional[str] = Field(None, max_length=255)
     room: Optional[str] = Field(None, max_length=100)
     floor: Optional[str] = Field(None, max_length=100)

     parties: Optional[List[Party]] = None
     keys: Optional[List[KeyEntry]] = None
     counters: Optional[List[CounterEntry]] = None
     miscellaneous: Optional[str] = None
     notes: Optional[str] = None
     signature: Optional[str] = None

     model_config = ConfigDict(
          str_strip_whitespace=True,
          json_schema_extra={
               "example": {
                    "keys": [{"type": "Front door", "quantity": 2}],
                    "notes": "Small scratch on kitchen counter",
               }
          },
     )


class AssignRequest(BaseModel):
     """Replace the set of users assigned to an object."""
     user_ids: List[int] = Field(..., description="User IDs to assign")


class ObjectResponse(BaseModel):
     """Schema for object response."""
     id: int
     name: str
     street: str
     postal_code: str
     city: str
     address_supplement: Optional[str] = None
     room: Optional[str] = None
     floor: Optional[str] = None

     created_by: int
     creator_name: Optional[str] = None
     assigned_users: List[int] = []

     status: ObjectStatus
     is_released: bool

     parties: List[Party] = []
     keys: List[KeyEntry] = []
     counters: List[CounterEntry] = []
     miscellaneous: Optional[str] = None
     notes: Optional[str] = None
     signature: Optional[str] = None

     created_at: Optional[datetime] = None
     assigned_at: Optional[datetime] = None
     completed_at: Optional[datetime] = None
     released_at: Optional[datetime] = None


class SectionImages(BaseModel):
     """Object images grouped by section."""
     keys: List[AttachmentResponse] = []
     counters: List[AttachmentResponse] = []
     miscellaneous: List[AttachmentResponse] = []


class ObjectDetailResponse(ObjectResponse):
     """Object with its rooms, images and what the caller may do next."""
     rooms: List[RoomWithAttachments] = []
     images: SectionImages = SectionImages()
     allowed_actions: List[str] = []


class ObjectListResponse(BaseModel):
     """Schema for object list response."""
     objects: List[ObjectResponse]
     total: int
