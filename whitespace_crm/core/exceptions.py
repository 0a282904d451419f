"""
Invite domain errors.

Every error the invite and membership services raise derives from
InviteError and carries the HTTP status it is surfaced with.
"""
from typing import Optional

from fastapi import status


class InviteError(Exception):
    """Base error for the team invite subsystem."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"detail": self.message}


class UnauthenticatedError(InviteError):
    """No resolvable caller identity."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ForbiddenError(InviteError):
    """Authenticated, but lacking the owner/admin role on the team."""

    status_code = status.HTTP_403_FORBIDDEN


class ValidationError(InviteError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        self.field = field
        super().__init__(message)

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.field:
            body["field"] = self.field
        return body


class ConflictError(InviteError):
    """Duplicate pending invite or existing membership."""

    status_code = status.HTTP_400_BAD_REQUEST


class ExpiredError(InviteError):
    """The invite passed its expiry."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "This invite has expired") -> None:
        super().__init__(message)


class NotFoundError(InviteError):
    """Unknown id, someone else's invite, or an already processed invite."""

    status_code = status.HTTP_404_NOT_FOUND
