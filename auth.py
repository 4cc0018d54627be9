# auth.py
"""
Token handling and the FastAPI dependencies that turn a request into an Actor.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from config import JWT_ALGORITHM, JWT_EXPIRE_MINUTES, JWT_SECRET
from database import get_session
from services.actor import Actor, resolve_actor

logger = logging.getLogger("handover.auth")


def create_access_token(user_id: int) -> str:
     expires = datetime.now(timezone.utc) + timedelta(minutes=JWT_EXPIRE_MINUTES)
     return jwt.encode({"id": user_id, "exp": expires}, JWT_SECRET, algorithm=JWT_ALGORITHM)


def current_actor_id(request: Request) -> Optional[int]:
     """
     Identity id from the bearer token, or None.

     Never raises: a missing, malformed or expired token just means there is
     no actor.
     """
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          return None
     token = auth.split(" ", 1)[1]
     try:
          payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
     except JWTError:
          logger.debug("Rejected invalid token")
          return None
     user_id = payload.get("id")
     return user_id if isinstance(user_id, int) else None


def get_current_actor(request: Request, db: Session = Depends(get_session)) -> Actor:
     """FastAPI dependency: the resolved Actor, or a 401 via Unauthenticated."""
     return resolve_actor(db, current_actor_id(request))
