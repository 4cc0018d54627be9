# schemas/__init__.py
from .attachment import (
     UploadTargetResponse,
     ObjectAttachmentCreate,
     RoomAttachmentCreate,
     AttachmentResponse,
)
from .room import RoomCreate, RoomUpdate, RoomResponse, RoomWithAttachments
from .object import (
     Party,
     KeyEntry,
     CounterEntry,
     ObjectCreate,
     ObjectUpdate,
     AssignRequest,
     ObjectResponse,
     ObjectDetailResponse,
     ObjectListResponse,
)
from .user import (
     RegisterRequest,
     LoginRequest,
     UserResponse,
     TokenResponse,
     UserCreate,
     RoleUpdate,
     ProfileUpdate,
     UserListResponse,
)

__all__ = [
     "UploadTargetResponse",
     "ObjectAttachmentCreate",
     "RoomAttachmentCreate",
     "AttachmentResponse",
     "RoomCreate",
     "RoomUpdate",
     "RoomResponse",
     "RoomWithAttachments",
     "Party",
     "KeyEntry",
     "CounterEntry",
     "ObjectCreate",
     "ObjectUpdate",
     "AssignRequest",
     "ObjectResponse",
     "ObjectDetailResponse",
     "ObjectListResponse",
     "RegisterRequest",
     "LoginRequest",
     "UserResponse",
     "TokenResponse",
     "UserCreate",
     "RoleUpdate",
     "ProfileUpdate",
     "UserListResponse",
]
