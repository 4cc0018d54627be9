# tests/test_lifecycle.py - Lifecycle State Machine unit tests
from datetime import datetime, timezone

import pytest

from models import ObjectStatus
from services import lifecycle
from services.errors import InvalidState
from tests.conftest import object_for

T1 = datetime(2026, 1, 1, tzinfo=timezone.utc)
T2 = datetime(2026, 2, 1, tzinfo=timezone.utc)


def test_happy_path_stamps_each_timestamp():
    obj = object_for(1)
    lifecycle.transition(obj, ObjectStatus.ASSIGNED, now=T1)
    lifecycle.transition(obj, ObjectStatus.COMPLETED, now=T1)
    lifecycle.transition(obj, ObjectStatus.RELEASED, now=T2)

    assert obj.status == ObjectStatus.RELEASED
    assert obj.is_released is True
    assert obj.assigned_at == T1
    assert obj.completed_at == T1
    assert obj.released_at == T2


@pytest.mark.parametrize("start", [ObjectStatus.DRAFT, ObjectStatus.ASSIGNED, ObjectStatus.COMPLETED])
def test_release_allowed_from_every_open_state(start):
    obj = object_for(1, start)
    lifecycle.transition(obj, ObjectStatus.RELEASED)
    assert obj.is_released is True
    assert obj.released_at is not None


@pytest.mark.parametrize("target", list(ObjectStatus))
def test_released_is_terminal(target):
    obj = object_for(1, ObjectStatus.RELEASED)
    obj.released_at = T1
    with pytest.raises(InvalidState):
        lifecycle.transition(obj, target, now=T2)
    assert obj.status == ObjectStatus.RELEASED
    assert obj.is_released is True
    assert obj.released_at == T1


def test_rerelease_message():
    obj = object_for(1, ObjectStatus.RELEASED)
    with pytest.raises(InvalidState, match="already released"):
        lifecycle.transition(obj, ObjectStatus.RELEASED)


def test_completing_released_object_fails():
    obj = object_for(1, ObjectStatus.RELEASED)
    with pytest.raises(InvalidState, match="Cannot complete a released object"):
        lifecycle.transition(obj, ObjectStatus.COMPLETED)


@pytest.mark.parametrize("current,target", [
    (ObjectStatus.DRAFT, ObjectStatus.COMPLETED),
    (ObjectStatus.COMPLETED, ObjectStatus.ASSIGNED),
    (ObjectStatus.COMPLETED, ObjectStatus.COMPLETED),
    (ObjectStatus.ASSIGNED, ObjectStatus.DRAFT),
])
def test_backwards_and_skipping_moves_are_rejected(current, target):
    obj = object_for(1, current)
    with pytest.raises(InvalidState):
        lifecycle.transition(obj, target)
    assert obj.status == current


def test_released_flag_follows_status():
    obj = object_for(1)
    for target in (ObjectStatus.ASSIGNED, ObjectStatus.COMPLETED, ObjectStatus.RELEASED):
        lifecycle.transition(obj, target)
        assert obj.is_released == (obj.status == ObjectStatus.RELEASED)


def test_ensure_editable():
    released = object_for(1, ObjectStatus.RELEASED)
    with pytest.raises(InvalidState):
        lifecycle.ensure_editable(released, actor_is_admin=False, admin_can_edit_released=True)
    with pytest.raises(InvalidState):
        lifecycle.ensure_editable(released, actor_is_admin=True, admin_can_edit_released=False)
    lifecycle.ensure_editable(released, actor_is_admin=True, admin_can_edit_released=True)
    lifecycle.ensure_editable(object_for(1, ObjectStatus.COMPLETED), False, False)


def test_stamps_are_naive_utc_like_the_columns():
    obj = object_for(1)
    lifecycle.transition(obj, ObjectStatus.RELEASED)
    assert obj.released_at.tzinfo is None
    assert abs(obj.released_at - datetime.now(timezone.utc).replace(tzinfo=None)).total_seconds() < 60
