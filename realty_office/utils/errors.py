"""Error handling utilities."""

from enum import Enum


class ErrorKind(str, Enum):
    """Error kinds surfaced to callers."""
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    INVALID_REFERENCE = "invalid_reference"
    CONFLICT = "conflict"


class RealtyOfficeError(Exception):
    """Base exception for the office backend."""
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Error envelope for callers."""
        return {"error": {"kind": self.kind.value, "message": self.message}}


class UnauthorizedError(RealtyOfficeError):
    """Base access or role capability check failed."""
    kind = ErrorKind.UNAUTHORIZED


class NotFoundError(RealtyOfficeError):
    """Referenced agent, property or inquiry does not exist."""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} '{resource_id}' not found")
        self.resource_type = resource_type
        self.resource_id = resource_id


class InvalidReferenceError(RealtyOfficeError):
    """Reference points at a missing or inactive agent."""
    kind = ErrorKind.INVALID_REFERENCE


class DuplicateEntityError(RealtyOfficeError):
    """Entity with the same identifier already exists."""
    kind = ErrorKind.CONFLICT
