"""
Error taxonomy for the courier records service.

Every service raises one of these; the API layer turns them into
``{"error": message}`` responses with the class's HTTP status.
"""
from typing import Any, Optional


class CourierError(Exception):
    """Base class for all domain errors"""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(CourierError):
    """Malformed or missing input"""
    status_code = 400


class FormatError(CourierError):
    """Upload could not be parsed as a workbook"""
    status_code = 400


class AuthError(CourierError):
    """Bad credentials or invalid/expired token"""
    status_code = 401


class ForbiddenError(CourierError):
    """Authenticated but lacking the required role"""
    status_code = 403


class NotFoundError(CourierError):
    status_code = 404


class ConflictError(CourierError):
    """Uniqueness violation"""
    status_code = 409


class StorageError(CourierError):
    """Persistence failure"""
    status_code = 500
