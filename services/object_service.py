# services/object_service.py
"""
Object Service - business logic for handover objects and their rooms.

Every operation resolves the object through services.loaders (existence +
visibility), then asks the Permission Evaluator and the Lifecycle State
Machine before touching anything.
"""
import logging
from typing import Optional

from sqlalchemy import select, or_
from sqlalchemy.orm import Session

import config
from models import (
     HandoverObject,
     ObjectAssignment,
     ObjectStatus,
     Room,
     Role,
     User,
     AttachmentSection,
     utcnow,
)
from services import lifecycle
from services.actor import Actor
from services.attachment_service import AttachmentService, attachment_view, purge_attachment
from services.errors import InvalidState, Unauthorized, ValidationFailed
from services.loaders import load_object, load_room
from services.permissions import Action, allowed_actions, is_assignee, require

logger = logging.getLogger("handover.objects")

# Columns that may be left out of a patch but never set to null
NOT_NULL_FIELDS = frozenset({
     "name", "street", "postal_code", "city", "parties", "keys", "counters",
})
ROOM_NOT_NULL_FIELDS = frozenset({
     "name", "flooring", "walls", "outlets", "light_switches", "windows", "radiators", "condition",
})
CREATOR_ROLES = (Role.ADMIN, Role.MANAGER)


def object_view(obj: HandoverObject, creator_name: Optional[str] = None) -> dict:
     """Object columns plus assignees as a plain dict."""
     return {
          "id": obj.id,
          "name": obj.name,
          "street": obj.street,
          "postal_code": obj.postal_code,
          "city": obj.city,
          "address_supplement": obj.address_supplement,
          "room": obj.room,
          "floor": obj.floor,
          "created_by": obj.created_by,
          "creator_name": creator_name,
          "assigned_users": obj.assigned_user_ids,
          "status": obj.status,
          "is_released": obj.is_released,
          "parties": obj.parties or [],
          "keys": obj.keys or [],
          "counters": obj.counters or [],
          "miscellaneous": obj.miscellaneous,
          "notes": obj.notes,
          "signature": obj.signature,
          "created_at": obj.created_at,
          "assigned_at": obj.assigned_at,
          "completed_at": obj.completed_at,
          "released_at": obj.released_at,
     }


def room_view(room: Room) -> dict:
     return {
          "id": room.id,
          "object_id": room.object_id,
          "name": room.name,
          "flooring": room.flooring,
          "walls": room.walls,
          "outlets": room.outlets,
          "light_switches": room.light_switches,
          "windows": room.windows,
          "radiators": room.radiators,
          "condition": room.condition,
          "created_at": room.created_at,
     }


def _unique(ids: list[int]) -> list[int]:
     return list(dict.fromkeys(ids))


def _reject_nulls(changes: dict, not_null: frozenset) -> None:
     nulls = sorted(f for f in changes if f in not_null and changes[f] is None)
     if nulls:
          raise ValidationFailed(f"Fields cannot be null: {', '.join(nulls)}")


class ObjectService:
     """Service class for handover object business logic."""

     @staticmethod
     def _ensure_users_exist(db: Session, user_ids: list[int]) -> None:
          if not user_ids:
               return
          found = {row[0] for row in db.query(User.id).filter(User.id.in_(user_ids)).all()}
          missing = [uid for uid in user_ids if uid not in found]
          if missing:
               raise ValidationFailed(f"Unknown user IDs: {', '.join(str(m) for m in missing)}")

     @staticmethod
     def _set_assignees(obj: HandoverObject, user_ids: list[int], actor: Actor) -> None:
          """Replace the assignment rows, keeping existing ones untouched."""
          wanted = set(user_ids)
          for assignment in list(obj.assignments):
               if assignment.user_id not in wanted:
                    obj.assignments.remove(assignment)

          current = set(obj.assigned_user_ids)
          now = utcnow()
          for user_id in user_ids:
               if user_id not in current:
                    obj.assignments.append(
                         ObjectAssignment(user_id=user_id, assigned_by=actor.id, assigned_at=now)
                    )

     @staticmethod
     def create(db: Session, actor: Actor, data: dict) -> HandoverObject:
          """
          Create an object owned by the actor.

          Args:
               db: SQLAlchemy database session
               actor: admin or manager creating the object
               data: validated ObjectCreate fields

          Returns:
               The new object, status "assigned" if assignees were given,
               otherwise "draft"

          Raises:
               Unauthorized: actor is a plain user
               ValidationFailed: an assignee does not exist
          """
          if actor.role not in CREATOR_ROLES:
               raise Unauthorized("Only admins and managers can create objects")

          fields = dict(data)
          assignees = _unique(fields.pop("assigned_users", None) or [])
          ObjectService._ensure_users_exist(db, assignees)

          obj = HandoverObject(
               **fields,
               created_by=actor.id,
               status=ObjectStatus.DRAFT,
               is_released=False,
          )
          db.add(obj)

          if assignees:
               ObjectService._set_assignees(obj, assignees, actor)
               lifecycle.transition(obj, ObjectStatus.ASSIGNED)

          db.flush()
          db.refresh(obj)
          logger.info("User %s created object %s (%s)", actor.id, obj.id, obj.status.value)
          return obj

     @staticmethod
     def update(db: Session, actor: Actor, object_id: int, changes: dict) -> HandoverObject:
          """
          Apply a partial patch; fields missing from `changes` stay as they are.

          A non-admin assignee editing an assigned object completes it in the
          same write.
          """
          obj = load_object(db, actor, object_id)
          if not changes:
               raise ValidationFailed("No fields to update")
          unknown = set(changes) - lifecycle.STRUCTURAL_FIELDS - lifecycle.CONTENT_FIELDS
          if unknown:
               raise ValidationFailed(f"Unknown fields: {', '.join(sorted(unknown))}")
          _reject_nulls(changes, NOT_NULL_FIELDS)

          policy = config.ADMIN_CAN_EDIT_RELEASED
          lifecycle.ensure_editable(obj, actor.is_admin, policy)
          if changes.keys() & lifecycle.STRUCTURAL_FIELDS:
               require(actor, Action.EDIT_STRUCTURE, obj, policy)
          if changes.keys() & lifecycle.CONTENT_FIELDS:
               require(actor, Action.EDIT_CONTENT, obj, policy)

          for field, value in changes.items():
               setattr(obj, field, value)

          if not actor.is_admin and is_assignee(actor, obj) and obj.status == ObjectStatus.ASSIGNED:
               lifecycle.transition(obj, ObjectStatus.COMPLETED)
               logger.info("Object %s completed by assignee %s", obj.id, actor.id)

          db.flush()
          return obj

     @staticmethod
     def assign(db: Session, actor: Actor, object_id: int, user_ids: list[int]) -> HandoverObject:
          """Replace the assignee set. The first assignment moves a draft to assigned."""
          obj = load_object(db, actor, object_id)
          policy = config.ADMIN_CAN_EDIT_RELEASED
          lifecycle.ensure_editable(obj, actor.is_admin, policy)
          require(actor, Action.ASSIGN, obj, policy)

          user_ids = _unique(user_ids)
          ObjectService._ensure_users_exist(db, user_ids)
          if not user_ids and obj.status != ObjectStatus.DRAFT:
               raise InvalidState("Cannot remove all assignees once an object has been assigned")

          ObjectService._set_assignees(obj, user_ids, actor)
          if user_ids and obj.status == ObjectStatus.DRAFT:
               lifecycle.transition(obj, ObjectStatus.ASSIGNED)

          db.flush()
          logger.info("User %s assigned object %s to %s", actor.id, obj.id, user_ids)
          return obj

     @staticmethod
     def complete(db: Session, actor: Actor, object_id: int) -> HandoverObject:
          obj = load_object(db, actor, object_id)
          lifecycle.check_transition(obj, ObjectStatus.COMPLETED)
          require(actor, Action.COMPLETE, obj)
          lifecycle.transition(obj, ObjectStatus.COMPLETED)
          db.flush()
          logger.info("Object %s completed by user %s", obj.id, actor.id)
          return obj

     @staticmethod
     def release(db: Session, actor: Actor, object_id: int) -> HandoverObject:
          """
          Lock the object. Releasing twice is an InvalidState error, not a no-op.
          """
          obj = load_object(db, actor, object_id)
          lifecycle.check_transition(obj, ObjectStatus.RELEASED)
          require(actor, Action.RELEASE, obj)
          lifecycle.transition(obj, ObjectStatus.RELEASED)
          db.flush()
          logger.info("Object %s released by user %s", obj.id, actor.id)
          return obj

     @staticmethod
     def delete(db: Session, actor: Actor, blob_store, object_id: int) -> None:
          """
          Admin only. Removes room images, rooms, object images and finally
          the object itself. Each image goes blob first, then its row.
          """
          obj = load_object(db, actor, object_id)
          require(actor, Action.DELETE, obj)

          rooms = db.query(Room).filter(Room.object_id == obj.id).all()
          for room in rooms:
               for attachment in AttachmentService.for_object(db, obj.id, room_id=room.id):
                    purge_attachment(db, blob_store, attachment)
               db.delete(room)
               # Commit per room so finished deletions survive a later blob failure
               db.commit()

          for attachment in AttachmentService.for_object(db, obj.id):
               purge_attachment(db, blob_store, attachment)

          db.delete(obj)
          db.flush()
          logger.info("Object %s deleted by admin %s (%d rooms)", object_id, actor.id, len(rooms))

     @staticmethod
     def get(db: Session, actor: Actor, blob_store, object_id: int) -> dict:
          """
          Denormalised view: the object, its rooms with their images, and the
          object images grouped by section.
          """
          obj = load_object(db, actor, object_id)

          rooms = (
               db.query(Room)
               .filter(Room.object_id == obj.id)
               .order_by(Room.created_at, Room.id)
               .all()
          )
          attachments = AttachmentService.for_object(db, obj.id)

          room_images: dict[int, list] = {room.id: [] for room in rooms}
          images = {section.value: [] for section in AttachmentSection}
          for attachment in attachments:
               view = attachment_view(attachment, blob_store)
               if attachment.room_id is not None:
                    room_images.setdefault(attachment.room_id, []).append(view)
               elif attachment.section is not None:
                    images[attachment.section.value].append(view)

          creator = db.get(User, obj.created_by)
          result = object_view(obj, creator.display_name if creator else None)
          result["rooms"] = [{**room_view(room), "images": room_images[room.id]} for room in rooms]
          result["images"] = images
          result["allowed_actions"] = allowed_actions(actor, obj, config.ADMIN_CAN_EDIT_RELEASED)
          return result

     @staticmethod
     def list_objects(
          db: Session,
          actor: Actor,
          search: Optional[str] = None,
          created_by: Optional[int] = None,
          assigned_to: Optional[int] = None,
          status: Optional[ObjectStatus] = None,
     ) -> list[dict]:
          """
          Objects visible to the actor, newest first.

          Admins see everything; everyone else only objects they created or
          are assigned to. The scope is applied in SQL before any filter.
          """
          query = db.query(HandoverObject)

          if not actor.is_admin:
               mine = select(ObjectAssignment.object_id).where(ObjectAssignment.user_id == actor.id)
               query = query.filter(
                    or_(HandoverObject.created_by == actor.id, HandoverObject.id.in_(mine))
               )

          if created_by is not None:
               query = query.filter(HandoverObject.created_by == created_by)

          if assigned_to is not None:
               theirs = select(ObjectAssignment.object_id).where(ObjectAssignment.user_id == assigned_to)
               query = query.filter(HandoverObject.id.in_(theirs))

          if status is not None:
               query = query.filter(HandoverObject.status == status)

          if search:
               query = query.filter(HandoverObject.name.icontains(search.strip(), autoescape=True))

          objects = query.order_by(HandoverObject.created_at.desc(), HandoverObject.id.desc()).all()

          creator_ids = {o.created_by for o in objects}
          names = {}
          if creator_ids:
               names = {u.id: u.display_name for u in db.query(User).filter(User.id.in_(creator_ids)).all()}

          return [object_view(o, names.get(o.created_by, "Unknown")) for o in objects]

     # ------------------------------------------------------------------
     # Rooms
     # ------------------------------------------------------------------

     @staticmethod
     def _ensure_content_editable(actor: Actor, obj: HandoverObject) -> None:
          lifecycle.ensure_editable(obj, actor.is_admin, config.ADMIN_CAN_EDIT_RELEASED)
          require(actor, Action.EDIT_CONTENT, obj, config.ADMIN_CAN_EDIT_RELEASED)

     @staticmethod
     def create_room(db: Session, actor: Actor, object_id: int, data: dict) -> Room:
          obj = load_object(db, actor, object_id)
          ObjectService._ensure_content_editable(actor, obj)

          room = Room(object_id=obj.id, **data)
          db.add(room)
          db.flush()
          db.refresh(room)
          return room

     @staticmethod
     def update_room(db: Session, actor: Actor, room_id: int, changes: dict) -> Room:
          room, obj = load_room(db, actor, room_id)
          if not changes:
               raise ValidationFailed("No fields to update")
          _reject_nulls(changes, ROOM_NOT_NULL_FIELDS)
          ObjectService._ensure_content_editable(actor, obj)

          for field, value in changes.items():
               setattr(room, field, value)
          db.flush()
          return room

     @staticmethod
     def delete_room(db: Session, actor: Actor, blob_store, room_id: int) -> None:
          room, obj = load_room(db, actor, room_id)
          ObjectService._ensure_content_editable(actor, obj)

          for attachment in AttachmentService.for_object(db, obj.id, room_id=room.id):
               purge_attachment(db, blob_store, attachment)
          db.delete(room)
          db.flush()
          logger.info("Room %s of object %s deleted by user %s", room_id, obj.id, actor.id)
