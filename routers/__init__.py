# routers/__init__.py
from .users import router as users_router
from .objects import router as objects_router
from .rooms import router as rooms_router
from .attachments import router as attachments_router

__all__ = [
     "users_router",
     "objects_router",
     "rooms_router",
     "attachments_router",
]
