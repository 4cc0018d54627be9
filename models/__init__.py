# models/__init__.py
from .base import Base, utcnow
from .user import User
from .user_profile import UserProfile, Role
from .handover_object import HandoverObject, ObjectStatus
from .object_assignment import ObjectAssignment
from .room import Room
from .attachment import Attachment, AttachmentSection

__all__ = [
     "Base",
     "utcnow",
     "User",
     "UserProfile",
     "Role",
     "HandoverObject",
     "ObjectStatus",
     "ObjectAssignment",
     "Room",
     "Attachment",
     "AttachmentSection",
]
