# routers/attachments.py
"""
Image attachment API routes.

Upload flow:
1. POST /api/attachments/upload-target -> storage_id + upload_url
2. client PUTs the image bytes to upload_url
3. POST the storage_id to the object section or room
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth import get_current_actor
from blob_store import get_blob_store
from database import get_session
from services import Actor, AttachmentService
from services.attachment_service import attachment_view
from schemas.attachment import (
     AttachmentResponse,
     ObjectAttachmentCreate,
     RoomAttachmentCreate,
     UploadTargetResponse,
)

router = APIRouter(prefix="/api", tags=["attachments"])


@router.post(
     "/attachments/upload-target",
     response_model=UploadTargetResponse,
     summary="Request an upload URL"
)
def request_upload_target(
     actor: Actor = Depends(get_current_actor),
     blob_store=Depends(get_blob_store)
):
     return AttachmentService.request_upload_target(actor, blob_store)


@router.post(
     "/objects/{object_id}/attachments",
     response_model=AttachmentResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Attach an image to an object section"
)
def attach_to_object(
     object_id: int,
     body: ObjectAttachmentCreate,
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor),
     blob_store=Depends(get_blob_store)
):
     attachment = AttachmentService.attach_to_object(
          db, actor, object_id, body.section, body.storage_id, body.filename
     )
     return attachment_view(attachment, blob_store)


@router.post(
     "/rooms/{room_id}/attachments",
     response_model=AttachmentResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Attach an image to a room"
)
def attach_to_room(
     room_id: int,
     body: RoomAttachmentCreate,
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor),
     blob_store=Depends(get_blob_store)
):
     attachment = AttachmentService.attach_to_room(db, actor, room_id, body.storage_id, body.filename)
     return attachment_view(attachment, blob_store)


@router.delete(
     "/attachments/{attachment_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete an image"
)
def delete_attachment(
     attachment_id: int,
     db: Session = Depends(get_session),
     actor: Actor = Depends(get_current_actor),
     blob_store=Depends(get_blob_store)
):
     """Removes the blob first; if that fails the record is kept."""
     AttachmentService.delete(db, actor, blob_store, attachment_id)
     return None
