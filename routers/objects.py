# routers/objects.py
"""
Handover object API routes.

Role-based access (enforced in services.permissions):
- Admin: everything; delete is admin-only
- Owner (creator): view, edit, assign, release
- Assignee: view, fill in form content, complete
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from auth import get_current_actor
from blob_store import get_blob_store
from database import get_session
from models import ObjectStatus
from services import Actor, ObjectService
from services.object_service import object_view
from schemas.object import (
     AssignRequest,
     ObjectCreate,
     ObjectDetailResponse,
     ObjectListResponse,
     ObjectResponse,
     ObjectUpdate,
)

router = APIRouter(prefix="/api/objects", tags=["objects"])


@router.post(
     "",
     response_model=ObjectResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a handover object"
)
def create_object(
     object_data: ObjectCreate,
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor)
):
     """
     Create a new object. Admins and managers only; the caller becomes owner.

     Passing **assigned_users** assigns the object immediately.
     """
     obj = ObjectService.create(db, actor, object_data.model_dump())
     return object_view(obj, actor.name)


@router.get(
     "",
     response_model=ObjectListResponse,
     summary="List objects"
)
def list_objects(
     search: Optional[str] = Query(None, description="Case-insensitive name search"),
     created_by: Optional[int] = Query(None, description="Filter by creator ID"),
     assigned_to: Optional[int] = Query(None, description="Filter by assignee ID"),
     status: Optional[ObjectStatus] = Query(None, description="Filter by status"),
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor)
):
     """
     **Role-based access:**
     - **Admin**: all objects.
     - **Everyone else**: only objects they created or are assigned to;
       filters narrow that set further.
     """
     objects = ObjectService.list_objects(
          db,
          actor,
          search=search,
          created_by=created_by,
          assigned_to=assigned_to,
          status=status,
     )
     return ObjectListResponse(objects=objects, total=len(objects))


@router.get(
     "/{object_id}",
     response_model=ObjectDetailResponse,
     summary="Get object with rooms and images"
)
def get_object(
     object_id: int,
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor),
     blob_store=Depends(get_blob_store)
):
     return ObjectService.get(db, actor, blob_store, object_id)


@router.patch(
     "/{object_id}",
     response_model=ObjectResponse,
     summary="Update object"
)
def update_object(
     object_id: int,
     object_data: ObjectUpdate,
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor)
):
     """
     Partial update: only fields present in the body are written.

     When an assignee submits form content for an assigned object, the
     object moves to **completed**.
     """
     obj = ObjectService.update(db, actor, object_id, object_data.model_dump(exclude_unset=True))
     return object_view(obj)


@router.put(
     "/{object_id}/assignees",
     response_model=ObjectResponse,
     summary="Replace object assignees"
)
def assign_object(
     object_id: int,
     body: AssignRequest,
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor)
):
     obj = ObjectService.assign(db, actor, object_id, body.user_ids)
     return object_view(obj)


@router.post(
     "/{object_id}/complete",
     response_model=ObjectResponse,
     summary="Mark object as completed"
)
def complete_object(
     object_id: int,
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor)
):
     obj = ObjectService.complete(db, actor, object_id)
     return object_view(obj)


@router.post(
     "/{object_id}/release",
     response_model=ObjectResponse,
     summary="Release (lock) object"
)
def release_object(
     object_id: int,
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor)
):
     """
     Lock the object. Admin or owner only; releasing twice returns 409.
     """
     obj = ObjectService.release(db, actor, object_id)
     return object_view(obj)


@router.delete(
     "/{object_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete object"
)
def delete_object(
     object_id: int,
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor),
     blob_store=Depends(get_blob_store)
):
     """
     Delete an object with all rooms and images. Admin only.
     """
     ObjectService.delete(db, actor, blob_store, object_id)
     return None
