# routers/rooms.py
"""
Room API routes. Rooms are form content: whoever may edit an object's
content may add, change and remove its rooms.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth import get_current_actor
from blob_store import get_blob_store
from database import get_session
from services import Actor, ObjectService
from schemas.room import RoomCreate, RoomResponse, RoomUpdate

router = APIRouter(prefix="/api", tags=["rooms"])


@router.post(
     "/objects/{object_id}/rooms",
     response_model=RoomResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Add a room to an object"
)
def create_room(
     object_id: int,
     room_data: RoomCreate,
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor)
):
     return ObjectService.create_room(db, actor, object_id, room_data.model_dump())


@router.patch(
     "/rooms/{room_id}",
     response_model=RoomResponse,
     summary="Update room"
)
def update_room(
     room_id: int,
     room_data: RoomUpdate,
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor)
):
     return ObjectService.update_room(db, actor, room_id, room_data.model_dump(exclude_unset=True))


@router.delete(
     "/rooms/{room_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete room"
)
def delete_room(
     room_id: int,
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor),
     blob_store=Depends(get_blob_store)
):
     """Delete a room together with its images."""
     ObjectService.delete_room(db, actor, blob_store, room_id)
     return None
