# services/permissions.py
"""
Permission Evaluator - single source of truth for who may do what to a
handover object.

Relations:
- admin: everything (editing a released object is a policy switch)
- owner (created the object): view, edit, assign, release until released; never delete
- assignee: view, edit form content while assigned/completed, complete while assigned
- anyone else: nothing

complete and release are only offered in states the lifecycle accepts.
Services check services.lifecycle first, so a second release is an
InvalidState rather than a permission error.
"""
from enum import Enum

from models import HandoverObject, ObjectStatus
from services.actor import Actor
from services.errors import Unauthorized


class Action(str, Enum):
     VIEW = "view"
     EDIT_STRUCTURE = "edit_structure"
     EDIT_CONTENT = "edit_content"
     ASSIGN = "assign"
     COMPLETE = "complete"
     RELEASE = "release"
     DELETE = "delete"


EDIT_ACTIONS = frozenset({Action.EDIT_STRUCTURE, Action.EDIT_CONTENT, Action.ASSIGN})

# Statuses in which an assignee may still change form content
ASSIGNEE_EDITABLE = frozenset({ObjectStatus.ASSIGNED, ObjectStatus.COMPLETED})


def is_owner(actor: Actor, obj: HandoverObject) -> bool:
     return obj.created_by == actor.id


def is_assignee(actor: Actor, obj: HandoverObject) -> bool:
     return actor.id in obj.assigned_user_ids


def can(
     actor: Actor,
     action: Action,
     obj: HandoverObject,
     admin_can_edit_released: bool = False,
) -> bool:
     """Return True if the actor may perform the action on the object."""
     released = obj.status == ObjectStatus.RELEASED

     if actor.is_admin:
          if released and action in EDIT_ACTIONS:
               return admin_can_edit_released
          if action == Action.RELEASE:
               return not released
          if action == Action.COMPLETE:
               return obj.status == ObjectStatus.ASSIGNED
          return True

     owner = is_owner(actor, obj)
     assignee = is_assignee(actor, obj)

     if action == Action.VIEW:
          return owner or assignee
     if action == Action.DELETE:
          return False
     if action == Action.RELEASE:
          return owner and not released
     if action == Action.COMPLETE:
          return assignee and obj.status == ObjectStatus.ASSIGNED

     if released:
          return False
     if action in (Action.EDIT_STRUCTURE, Action.ASSIGN):
          return owner
     if action == Action.EDIT_CONTENT:
          return owner or (assignee and obj.status in ASSIGNEE_EDITABLE)
     return False


def require(
     actor: Actor,
     action: Action,
     obj: HandoverObject,
     admin_can_edit_released: bool = False,
) -> None:
     """Raise Unauthorized unless can() allows the action."""
     if not can(actor, action, obj, admin_can_edit_released):
          raise Unauthorized(f"Not authorized to {action.value.replace('_', ' ')} this object")


def allowed_actions(
     actor: Actor,
     obj: HandoverObject,
     admin_can_edit_released: bool = False,
) -> list[str]:
     """All actions the actor may currently perform, for the object view."""
     return [a.value for a in Action if can(actor, a, obj, admin_can_edit_released)]
