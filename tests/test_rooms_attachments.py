# tests/test_rooms_attachments.py - Rooms and image attachments
import pytest

from models import Attachment, Room
from tests.conftest import create_object, get_auth_headers

ROOM = {
    "name": "Kitchen",
    "flooring": "Tiles",
    "walls": "Painted",
    "outlets": 6,
    "light_switches": 2,
    "windows": 1,
    "radiators": 1,
    "condition": "good",
}


@pytest.fixture
def assigned_object(client, manager_user, assignee_user):
    return create_object(client, manager_user, assigned_users=[assignee_user.id])


def add_room(client, user, object_id, **overrides):
    resp = client.post(
        f"/api/objects/{object_id}/rooms",
        json={**ROOM, **overrides},
        headers=get_auth_headers(user),
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestRooms:

    def test_assignee_adds_and_updates_room(self, client, assignee_user, assigned_object):
        room = add_room(client, assignee_user, assigned_object["id"])
        assert room["object_id"] == assigned_object["id"]
        assert room["outlets"] == 6

        resp = client.patch(
            f"/api/rooms/{room['id']}",
            json={"condition": "needs repair"},
            headers=get_auth_headers(assignee_user),
        )
        assert resp.status_code == 200
        assert resp.json()["condition"] == "needs repair"
        assert resp.json()["flooring"] == "Tiles"

    def test_outsider_cannot_touch_rooms(self, client, manager_user, outsider_user, assigned_object):
        room = add_room(client, manager_user, assigned_object["id"])
        headers = get_auth_headers(outsider_user)
        assert client.post(
            f"/api/objects/{assigned_object['id']}/rooms", json=ROOM, headers=headers
        ).status_code == 403
        assert client.patch(f"/api/rooms/{room['id']}", json={"walls": "x"}, headers=headers).status_code == 403
        assert client.delete(f"/api/rooms/{room['id']}", headers=headers).status_code == 403

    def test_rooms_frozen_after_release(self, client, manager_user, assigned_object):
        room = add_room(client, manager_user, assigned_object["id"])
        headers = get_auth_headers(manager_user)
        client.post(f"/api/objects/{assigned_object['id']}/release", headers=headers)

        assert client.post(
            f"/api/objects/{assigned_object['id']}/rooms", json=ROOM, headers=headers
        ).status_code == 409
        assert client.patch(f"/api/rooms/{room['id']}", json={"walls": "x"}, headers=headers).status_code == 409
        assert client.delete(f"/api/rooms/{room['id']}", headers=headers).status_code == 409

    def test_negative_counts_rejected(self, client, manager_user, assigned_object):
        resp = client.post(
            f"/api/objects/{assigned_object['id']}/rooms",
            json={**ROOM, "outlets": -1},
            headers=get_auth_headers(manager_user),
        )
        assert resp.status_code == 422

    def test_null_room_name_rejected(self, client, manager_user, assigned_object):
        room = add_room(client, manager_user, assigned_object["id"])
        resp = client.patch(
            f"/api/rooms/{room['id']}", json={"name": None}, headers=get_auth_headers(manager_user)
        )
        assert resp.status_code == 422

    def test_delete_room_removes_its_images(
        self, client, manager_user, assigned_object, blob_store, db_session
    ):
        headers = get_auth_headers(manager_user)
        room = add_room(client, manager_user, assigned_object["id"])
        blob_store.upload("room-img")
        blob_store.upload("key-img")
        client.post(
            f"/api/rooms/{room['id']}/attachments",
            json={"storage_id": "room-img", "filename": "room.jpg"},
            headers=headers,
        )
        client.post(
            f"/api/objects/{assigned_object['id']}/attachments",
            json={"section": "keys", "storage_id": "key-img", "filename": "keys.jpg"},
            headers=headers,
        )

        assert client.delete(f"/api/rooms/{room['id']}", headers=headers).status_code == 204
        assert blob_store.deleted == ["room-img"]
        assert db_session.query(Room).count() == 0
        assert [a.storage_id for a in db_session.query(Attachment).all()] == ["key-img"]

    def test_room_view_in_object_detail(self, client, manager_user, assigned_object, blob_store):
        headers = get_auth_headers(manager_user)
        room = add_room(client, manager_user, assigned_object["id"])
        blob_store.upload("room-img")
        client.post(
            f"/api/rooms/{room['id']}/attachments",
            json={"storage_id": "room-img", "filename": "room.jpg"},
            headers=headers,
        )

        detail = client.get(f"/api/objects/{assigned_object['id']}", headers=headers).json()
        assert len(detail["rooms"]) == 1
        images = detail["rooms"][0]["images"]
        assert [i["filename"] for i in images] == ["room.jpg"]
        assert images[0]["url"] == "https://blobs.test/room-img"
        assert images[0]["section"] is None
        assert detail["images"]["keys"] == []


class TestAttachments:

    def test_upload_target(self, client, assignee_user):
        resp = client.post("/api/attachments/upload-target", headers=get_auth_headers(assignee_user))
        assert resp.status_code == 200
        body = resp.json()
        assert body["storage_id"] == "blob-1"
        assert body["upload_url"].endswith("blob-1")
        assert body["expires_at"]

    def test_upload_target_needs_authentication(self, client):
        assert client.post("/api/attachments/upload-target").status_code == 401

    def test_images_grouped_by_section(self, client, assignee_user, assigned_object, blob_store):
        headers = get_auth_headers(assignee_user)
        for section, storage_id in [("keys", "k1"), ("counters", "c1"), ("keys", "k2")]:
            blob_store.upload(storage_id)
            resp = client.post(
                f"/api/objects/{assigned_object['id']}/attachments",
                json={"section": section, "storage_id": storage_id, "filename": f"{storage_id}.jpg"},
                headers=headers,
            )
            assert resp.status_code == 201
            assert resp.json()["section"] == section
            assert resp.json()["room_id"] is None

        images = client.get(f"/api/objects/{assigned_object['id']}", headers=headers).json()["images"]
        assert [i["storage_id"] for i in images["keys"]] == ["k1", "k2"]
        assert [i["storage_id"] for i in images["counters"]] == ["c1"]
        assert images["miscellaneous"] == []

    def test_missing_blob_resolves_to_null_url(self, client, manager_user, assigned_object):
        headers = get_auth_headers(manager_user)
        resp = client.post(
            f"/api/objects/{assigned_object['id']}/attachments",
            json={"section": "miscellaneous", "storage_id": "never-uploaded", "filename": "x.jpg"},
            headers=headers,
        )
        assert resp.status_code == 201
        assert resp.json()["url"] is None

        images = client.get(f"/api/objects/{assigned_object['id']}", headers=headers).json()["images"]
        assert images["miscellaneous"][0]["url"] is None

    def test_invalid_section_rejected(self, client, manager_user, assigned_object):
        resp = client.post(
            f"/api/objects/{assigned_object['id']}/attachments",
            json={"section": "garden", "storage_id": "s", "filename": "x.jpg"},
            headers=get_auth_headers(manager_user),
        )
        assert resp.status_code == 422

    def test_outsider_cannot_attach(self, client, outsider_user, assigned_object):
        resp = client.post(
            f"/api/objects/{assigned_object['id']}/attachments",
            json={"section": "keys", "storage_id": "s", "filename": "x.jpg"},
            headers=get_auth_headers(outsider_user),
        )
        assert resp.status_code == 403

    def test_no_attachments_after_release(self, client, manager_user, assigned_object, db_session):
        headers = get_auth_headers(manager_user)
        client.post(f"/api/objects/{assigned_object['id']}/release", headers=headers)
        resp = client.post(
            f"/api/objects/{assigned_object['id']}/attachments",
            json={"section": "keys", "storage_id": "s", "filename": "x.jpg"},
            headers=headers,
        )
        assert resp.status_code == 409
        assert db_session.query(Attachment).count() == 0

    def test_delete_attachment(self, client, manager_user, assigned_object, blob_store, db_session):
        headers = get_auth_headers(manager_user)
        blob_store.upload("k1")
        att = client.post(
            f"/api/objects/{assigned_object['id']}/attachments",
            json={"section": "keys", "storage_id": "k1", "filename": "k1.jpg"},
            headers=headers,
        ).json()

        assert client.delete(f"/api/attachments/{att['id']}", headers=headers).status_code == 204
        assert blob_store.deleted == ["k1"]
        assert db_session.query(Attachment).count() == 0

    def test_failed_blob_delete_keeps_record(self, client, manager_user, assigned_object, blob_store, db_session):
        headers = get_auth_headers(manager_user)
        blob_store.upload("k1")
        att = client.post(
            f"/api/objects/{assigned_object['id']}/attachments",
            json={"section": "keys", "storage_id": "k1", "filename": "k1.jpg"},
            headers=headers,
        ).json()

        blob_store.fail_deletes = True
        resp = client.delete(f"/api/attachments/{att['id']}", headers=headers)
        assert resp.status_code == 502
        assert db_session.query(Attachment).count() == 1
        assert "k1" in blob_store.blobs

    def test_missing_attachment_is_generic_for_non_admin(self, client, outsider_user, admin_user):
        resp = client.delete("/api/attachments/999", headers=get_auth_headers(outsider_user))
        assert resp.status_code == 403
        assert resp.json()["detail"] == "Not found or not authorized"
        assert client.delete("/api/attachments/999", headers=get_auth_headers(admin_user)).status_code == 404
