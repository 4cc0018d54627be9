# services/attachment_service.py
"""
Attachment Service - image metadata tied to an object section or a room.

Blob bytes never pass through the backend: the client uploads to the target
returned by request_upload_target() and then registers the storage id here.
Writes are gated exactly like object content edits.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

import config
from models import Attachment, AttachmentSection, HandoverObject
from services import lifecycle
from services.actor import Actor
from services.loaders import load_attachment, load_object, load_room
from services.permissions import Action, require

logger = logging.getLogger("handover.attachments")


def attachment_view(attachment: Attachment, blob_store) -> dict:
     """Attachment as a plain dict with a freshly resolved URL (None if the blob is gone)."""
     return {
          "id": attachment.id,
          "object_id": attachment.object_id,
          "room_id": attachment.room_id,
          "section": attachment.section,
          "storage_id": attachment.storage_id,
          "filename": attachment.filename,
          "created_at": attachment.created_at,
          "url": blob_store.resolve_url(attachment.storage_id),
     }


def purge_attachment(db: Session, blob_store, attachment: Attachment) -> None:
     """
     Delete the blob, then the metadata row, and commit.

     If the blob delete fails the row is kept, so a record never points at
     a blob that was already removed.
     """
     blob_store.delete(attachment.storage_id)
     db.delete(attachment)
     # Commit here, not in get_session, so the row goes together with its blob
     db.commit()
     logger.info("Deleted attachment %s (blob %s)", attachment.id, attachment.storage_id)


class AttachmentService:
     """Service class for attachment operations."""

     @staticmethod
     def _ensure_content_editable(actor: Actor, obj: HandoverObject) -> None:
          lifecycle.ensure_editable(obj, actor.is_admin, config.ADMIN_CAN_EDIT_RELEASED)
          require(actor, Action.EDIT_CONTENT, obj, config.ADMIN_CAN_EDIT_RELEASED)

     @staticmethod
     def request_upload_target(actor: Actor, blob_store) -> dict:
          """
          Any authenticated actor may ask for an upload target; whether the
          image may be attached is decided later by attach_*.
          """
          target = blob_store.request_upload_target()
          logger.debug("Issued upload target %s to user %s", target["storage_id"], actor.id)
          return target

     @staticmethod
     def attach_to_object(
          db: Session,
          actor: Actor,
          object_id: int,
          section: AttachmentSection,
          storage_id: str,
          filename: str,
     ) -> Attachment:
          obj = load_object(db, actor, object_id)
          AttachmentService._ensure_content_editable(actor, obj)

          attachment = Attachment(
               object_id=obj.id,
               section=section,
               storage_id=storage_id,
               filename=filename,
          )
          db.add(attachment)
          db.flush()
          db.refresh(attachment)
          return attachment

     @staticmethod
     def attach_to_room(
          db: Session,
          actor: Actor,
          room_id: int,
          storage_id: str,
          filename: str,
     ) -> Attachment:
          room, obj = load_room(db, actor, room_id)
          AttachmentService._ensure_content_editable(actor, obj)

          attachment = Attachment(
               object_id=obj.id,
               room_id=room.id,
               storage_id=storage_id,
               filename=filename,
          )
          db.add(attachment)
          db.flush()
          db.refresh(attachment)
          return attachment

     @staticmethod
     def delete(db: Session, actor: Actor, blob_store, attachment_id: int) -> None:
          attachment, obj = load_attachment(db, actor, attachment_id)
          AttachmentService._ensure_content_editable(actor, obj)
          purge_attachment(db, blob_store, attachment)

     @staticmethod
     def for_object(db: Session, object_id: int, room_id: Optional[int] = None) -> list[Attachment]:
          """Attachments of an object; room_id narrows to one room."""
          query = db.query(Attachment).filter(Attachment.object_id == object_id)
          if room_id is not None:
               query = query.filter(Attachment.room_id == room_id)
          return query.order_by(Attachment.created_at, Attachment.id).all()
