# services/errors.py
"""
Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; main.py installs a single
exception handler that renders them as {"detail": message}.
"""


class HandoverError(Exception):
     """Base class for all service-layer errors."""
     status_code = 400

     def __init__(self, message: str):
          super().__init__(message)
          self.message = message


class Unauthenticated(HandoverError):
     """No actor could be resolved for the request."""
     status_code = 401


class Unauthorized(HandoverError):
     """The actor is known but may not perform the action."""
     status_code = 403


class NotFound(HandoverError):
     """A referenced record does not exist."""
     status_code = 404


class InvalidState(HandoverError):
     """The action is not allowed in the object's current lifecycle state."""
     status_code = 409


class ValidationFailed(HandoverError):
     """The payload is well-formed but refers to something invalid."""
     status_code = 422


class BlobStoreError(HandoverError):
     """The blob store rejected or failed an operation."""
     status_code = 502
