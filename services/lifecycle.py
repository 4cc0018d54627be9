# services/lifecycle.py
"""
Lifecycle State Machine for handover objects.

     draft -> assigned -> completed -> released

Any non-released status may go straight to released. Transitions only
move forward; released is terminal.
"""
from datetime import datetime
from typing import Optional

from models import HandoverObject, ObjectStatus, utcnow
from services.errors import InvalidState


TRANSITIONS: dict[ObjectStatus, frozenset[ObjectStatus]] = {
     ObjectStatus.DRAFT: frozenset({ObjectStatus.ASSIGNED, ObjectStatus.RELEASED}),
     ObjectStatus.ASSIGNED: frozenset({ObjectStatus.COMPLETED, ObjectStatus.RELEASED}),
     ObjectStatus.COMPLETED: frozenset({ObjectStatus.RELEASED}),
     ObjectStatus.RELEASED: frozenset(),
}

# Timestamp column stamped when entering a status
STAMPS = {
     ObjectStatus.ASSIGNED: "assigned_at",
     ObjectStatus.COMPLETED: "completed_at",
     ObjectStatus.RELEASED: "released_at",
}

STRUCTURAL_FIELDS = frozenset({
     "name", "street", "postal_code", "city", "address_supplement", "room", "floor",
})
CONTENT_FIELDS = frozenset({
     "parties", "keys", "counters", "miscellaneous", "notes", "signature",
})


def can_transition(current: ObjectStatus, target: ObjectStatus) -> bool:
     return target in TRANSITIONS[current]


def _rejection(current: ObjectStatus, target: ObjectStatus) -> str:
     if current == ObjectStatus.RELEASED:
          if target == ObjectStatus.RELEASED:
               return "Object is already released"
          if target == ObjectStatus.COMPLETED:
               return "Cannot complete a released object"
          return "Released objects cannot be reopened"
     if target == ObjectStatus.COMPLETED:
          return f"Only assigned objects can be completed (status is {current.value})"
     return f"Cannot move object from {current.value} to {target.value}"


def check_transition(obj: HandoverObject, target: ObjectStatus) -> None:
     """Raise InvalidState unless the object may move to the target status."""
     if not can_transition(obj.status, target):
          raise InvalidState(_rejection(obj.status, target))


def transition(obj: HandoverObject, target: ObjectStatus, now: Optional[datetime] = None) -> None:
     """
     Move the object to the target status.

     Keeps is_released in sync and stamps the matching timestamp once.

     Raises:
          InvalidState: the transition is not allowed from the current status
     """
     check_transition(obj, target)

     obj.status = target
     obj.is_released = target == ObjectStatus.RELEASED

     stamp = STAMPS.get(target)
     if stamp and getattr(obj, stamp) is None:
          setattr(obj, stamp, now or utcnow())


def ensure_editable(obj: HandoverObject, actor_is_admin: bool, admin_can_edit_released: bool) -> None:
     """Released objects are frozen, except for admins when the policy allows it."""
     if obj.status != ObjectStatus.RELEASED:
          return
     if actor_is_admin and admin_can_edit_released:
          return
     raise InvalidState("Cannot edit released object")
