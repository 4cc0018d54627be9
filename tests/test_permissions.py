# tests/test_permissions.py - Permission Evaluator unit tests
import pytest

from models import ObjectStatus, Role
from services.errors import Unauthorized
from services.permissions import Action, allowed_actions, can, require
from tests.conftest import actor_for, object_for

OWNER_ID = 1
ASSIGNEE_ID = 2
OUTSIDER_ID = 3
ADMIN_ID = 9

owner = actor_for(OWNER_ID, Role.MANAGER)
assignee = actor_for(ASSIGNEE_ID)
outsider = actor_for(OUTSIDER_ID)
admin = actor_for(ADMIN_ID, Role.ADMIN)


def make(status):
    assignees = () if status == ObjectStatus.DRAFT else (ASSIGNEE_ID,)
    return object_for(OWNER_ID, status, assignees)


@pytest.mark.parametrize("status", list(ObjectStatus))
def test_outsider_can_do_nothing(status):
    obj = make(status)
    assert not any(can(outsider, action, obj) for action in Action)
    assert allowed_actions(outsider, obj) == []


@pytest.mark.parametrize("status", list(ObjectStatus))
def test_outsider_with_manager_role_still_has_no_access(status):
    manager = actor_for(OUTSIDER_ID, Role.MANAGER)
    assert not can(manager, Action.VIEW, make(status))


@pytest.mark.parametrize("status", [ObjectStatus.DRAFT, ObjectStatus.ASSIGNED, ObjectStatus.COMPLETED])
def test_owner_can_edit_and_release_until_released(status):
    obj = make(status)
    for action in (Action.VIEW, Action.EDIT_STRUCTURE, Action.EDIT_CONTENT, Action.ASSIGN, Action.RELEASE):
        assert can(owner, action, obj), action
    assert not can(owner, Action.DELETE, obj)


def test_owner_cannot_edit_released_object():
    obj = make(ObjectStatus.RELEASED)
    assert can(owner, Action.VIEW, obj)
    assert not can(owner, Action.EDIT_CONTENT, obj)
    assert not can(owner, Action.EDIT_STRUCTURE, obj)
    assert not can(owner, Action.ASSIGN, obj)
    assert not can(owner, Action.DELETE, obj)


def test_assignee_edits_content_only_while_assigned_or_completed():
    assert can(assignee, Action.EDIT_CONTENT, make(ObjectStatus.ASSIGNED))
    assert can(assignee, Action.EDIT_CONTENT, make(ObjectStatus.COMPLETED))
    assert not can(assignee, Action.EDIT_CONTENT, make(ObjectStatus.RELEASED))


def test_assignee_cannot_touch_structure_assignment_release_or_delete():
    obj = make(ObjectStatus.ASSIGNED)
    assert can(assignee, Action.VIEW, obj)
    assert can(assignee, Action.COMPLETE, obj)
    for action in (Action.EDIT_STRUCTURE, Action.ASSIGN, Action.RELEASE, Action.DELETE):
        assert not can(assignee, action, obj), action


@pytest.mark.parametrize("status", list(ObjectStatus))
def test_admin_can_view_and_delete_anything(status):
    obj = make(status)
    assert can(admin, Action.VIEW, obj)
    assert can(admin, Action.DELETE, obj)
    assert can(admin, Action.RELEASE, obj) == (status != ObjectStatus.RELEASED)


def test_admin_edits_released_object_only_under_policy():
    obj = make(ObjectStatus.RELEASED)
    assert not can(admin, Action.EDIT_CONTENT, obj)
    assert not can(admin, Action.EDIT_STRUCTURE, obj, admin_can_edit_released=False)
    assert can(admin, Action.EDIT_CONTENT, obj, admin_can_edit_released=True)
    assert can(admin, Action.ASSIGN, obj, admin_can_edit_released=True)


def test_require_raises_unauthorized():
    with pytest.raises(Unauthorized):
        require(assignee, Action.DELETE, make(ObjectStatus.ASSIGNED))
    require(admin, Action.DELETE, make(ObjectStatus.ASSIGNED))


@pytest.mark.parametrize("status", [ObjectStatus.DRAFT, ObjectStatus.COMPLETED, ObjectStatus.RELEASED])
def test_complete_only_offered_while_assigned(status):
    obj = make(status)
    assert not can(assignee, Action.COMPLETE, obj)
    assert not can(admin, Action.COMPLETE, obj)
    assert "complete" not in allowed_actions(assignee, obj)


def test_released_object_offers_no_release():
    obj = make(ObjectStatus.RELEASED)
    assert not can(owner, Action.RELEASE, obj)
    assert allowed_actions(owner, obj) == ["view"]
    assert "release" not in allowed_actions(admin, obj)


def test_completed_object_offers_assignee_edit_but_not_complete():
    assert allowed_actions(assignee, make(ObjectStatus.COMPLETED)) == ["view", "edit_content"]
