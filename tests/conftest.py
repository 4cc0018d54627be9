# tests/conftest.py - Shared test fixtures
import os
from datetime import datetime, timedelta, timezone

import pytest

# Use in-memory SQLite for tests
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-for-unit-tests-only"

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import config
from auth import create_access_token
from blob_store import get_blob_store
from database import get_session
from main import app
from models import Base, HandoverObject, ObjectAssignment, ObjectStatus, Role, User, UserProfile
from services.actor import Actor
from services.errors import BlobStoreError


class FakeBlobStore:
    """In-memory stand-in for AzureBlobStore."""

    def __init__(self):
        self.blobs = set()
        self.deleted = []
        self.fail_deletes = False
        self._counter = 0

    def request_upload_target(self) -> dict:
        self._counter += 1
        storage_id = f"blob-{self._counter}"
        return {
            "storage_id": storage_id,
            "upload_url": f"https://blobs.test/upload/{storage_id}",
            "expires_at": datetime.now(timezone.utc) + timedelta(minutes=15),
        }

    def upload(self, storage_id: str) -> None:
        self.blobs.add(storage_id)

    def resolve_url(self, storage_id: str):
        if storage_id not in self.blobs:
            return None
        return f"https://blobs.test/{storage_id}"

    def delete(self, storage_id: str) -> None:
        if self.fail_deletes:
            raise BlobStoreError("Failed to delete image from storage")
        self.blobs.discard(storage_id)
        self.deleted.append(storage_id)


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    session_factory = sessionmaker(bind=db_engine, autoflush=False, expire_on_commit=False)
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def blob_store():
    return FakeBlobStore()


@pytest.fixture
def client(db_session, blob_store):
    """HTTP test client sharing the test session and the fake blob store"""

    def override_get_session():
        try:
            yield db_session
            db_session.commit()
        except Exception:
            db_session.rollback()
            raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def foreign_keys_on(db_session):
    """Make SQLite enforce foreign keys the way the production database does"""
    db_session.connection().exec_driver_sql("PRAGMA foreign_keys=ON")
    yield
    db_session.rollback()
    db_session.connection().exec_driver_sql("PRAGMA foreign_keys=OFF")


@pytest.fixture
def admin_policy(monkeypatch):
    """Switch the admin-edits-released policy on for one test"""
    monkeypatch.setattr(config, "ADMIN_CAN_EDIT_RELEASED", True)


def make_user(db_session, email: str, role=None, name: str = None) -> User:
    """Create a user (with a profile when role is given). Password is not usable."""
    user = User(email=email, password="!", name=name or email.split("@")[0])
    db_session.add(user)
    db_session.flush()
    if role is not None:
        db_session.add(UserProfile(user_id=user.id, role=role))
    db_session.commit()
    return user


@pytest.fixture
def admin_user(db_session):
    return make_user(db_session, "admin@handover.test", Role.ADMIN, "Admin")


@pytest.fixture
def manager_user(db_session):
    return make_user(db_session, "manager@handover.test", Role.MANAGER, "Manager")


@pytest.fixture
def assignee_user(db_session):
    return make_user(db_session, "assignee@handover.test", Role.USER, "Assignee")


@pytest.fixture
def outsider_user(db_session):
    return make_user(db_session, "outsider@handover.test", Role.USER, "Outsider")


def get_auth_headers(user: User) -> dict:
    """Generate auth headers for a user"""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


OBJECT_PAYLOAD = {
    "name": "Apartment 3B",
    "street": "Hauptstrasse 12",
    "postal_code": "10115",
    "city": "Berlin",
}


def create_object(client, creator: User, **overrides) -> dict:
    """Create an object through the API and return the response body"""
    resp = client.post(
        "/api/objects",
        json={**OBJECT_PAYLOAD, **overrides},
        headers=get_auth_headers(creator),
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def actor_for(user_id: int, role=Role.USER) -> Actor:
    return Actor(id=user_id, name=f"user{user_id}", email=f"user{user_id}@handover.test", role=role)


def object_for(created_by: int, status=ObjectStatus.DRAFT, assignees=()) -> HandoverObject:
    """Transient object for pure permission/lifecycle tests"""
    obj = HandoverObject(
        name="Test",
        street="Street 1",
        postal_code="12345",
        city="Town",
        created_by=created_by,
        status=status,
        is_released=status == ObjectStatus.RELEASED,
    )
    obj.assignments = [ObjectAssignment(user_id=uid) for uid in assignees]
    return obj
