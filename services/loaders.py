# services/loaders.py
"""
Fetch helpers that combine the existence check with the view permission.

Non-admins get the same generic error whether a record is missing or just
not theirs, so the API never reveals which objects exist.
"""
from sqlalchemy.orm import Session

from models import HandoverObject, Room, Attachment
from services.actor import Actor
from services.errors import NotFound, Unauthorized
from services.permissions import Action, can

GENERIC_DENIAL = "Not found or not authorized"


def _missing(actor: Actor, label: str, record_id: int):
     if actor.is_admin:
          return NotFound(f"{label} with ID {record_id} not found")
     return Unauthorized(GENERIC_DENIAL)


def _visible_object(db: Session, actor: Actor, object_id: int, label: str, record_id: int) -> HandoverObject:
     obj = db.get(HandoverObject, object_id)
     if obj is None or not can(actor, Action.VIEW, obj):
          raise _missing(actor, label, record_id)
     return obj


def load_object(db: Session, actor: Actor, object_id: int) -> HandoverObject:
     return _visible_object(db, actor, object_id, "Object", object_id)


def load_room(db: Session, actor: Actor, room_id: int) -> tuple[Room, HandoverObject]:
     room = db.get(Room, room_id)
     if room is None:
          raise _missing(actor, "Room", room_id)
     return room, _visible_object(db, actor, room.object_id, "Room", room_id)


def load_attachment(db: Session, actor: Actor, attachment_id: int) -> tuple[Attachment, HandoverObject]:
     attachment = db.get(Attachment, attachment_id)
     if attachment is None:
          raise _missing(actor, "Attachment", attachment_id)
     return attachment, _visible_object(db, actor, attachment.object_id, "Attachment", attachment_id)
