# services/__init__.py
from .errors import (
     HandoverError,
     Unauthenticated,
     Unauthorized,
     NotFound,
     InvalidState,
     ValidationFailed,
     BlobStoreError,
)
from .actor import Actor, resolve_actor
from .permissions import Action, can, require
from .object_service import ObjectService
from .attachment_service import AttachmentService
from .user_service import UserService

__all__ = [
     "HandoverError",
     "Unauthenticated",
     "Unauthorized",
     "NotFound",
     "InvalidState",
     "ValidationFailed",
     "BlobStoreError",
     "Actor",
     "resolve_actor",
     "Action",
     "can",
     "require",
     "ObjectService",
     "AttachmentService",
     "UserService",
]
