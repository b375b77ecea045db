"""
Domain-specific exception hierarchy and its mapping to transport status.

Every domain error carries a ``kind``. The table ``ERROR_STATUS`` is the one
place where kinds are translated into HTTP-style status codes and titles.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    BUSINESS_RULE = "business_rule"
    DUPLICATE = "duplicate"
    FORBIDDEN = "forbidden"
    AUTHENTICATION = "authentication"


ERROR_STATUS: Dict[ErrorKind, Tuple[int, str]] = {
    ErrorKind.NOT_FOUND: (404, "Resource Not Found"),
    ErrorKind.BUSINESS_RULE: (422, "Business Rule Violation"),
    ErrorKind.DUPLICATE: (409, "Duplicate Resource"),
    ErrorKind.FORBIDDEN: (403, "Forbidden"),
    ErrorKind.AUTHENTICATION: (401, "Authentication Failed"),
}

INTERNAL_ERROR: Tuple[int, str] = (500, "Internal Server Error")


class DomainError(Exception):
    """Base class for all domain-level errors."""

    kind: ErrorKind


class ResourceNotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource_type: str, field: str, value: str):
        super().__init__(f"{resource_type} with {field} '{value}' not found")
        self.resource_type = resource_type
        self.field = field
        self.value = value


class DuplicateResourceError(DomainError):
    """Raised when creating a resource that already exists."""

    kind = ErrorKind.DUPLICATE

    def __init__(self, resource_type: str, field: str, value: str):
        super().__init__(f"{resource_type} with {field} '{value}' already exists")
        self.resource_type = resource_type
        self.field = field
        self.value = value


class InvalidBusinessRuleError(DomainError):
    """Raised when an operation violates a business rule."""

    kind = ErrorKind.BUSINESS_RULE


class UnauthorizedOperationError(DomainError):
    """Raised when an authenticated user lacks permission for an operation."""

    kind = ErrorKind.FORBIDDEN


class AuthenticationFailedError(DomainError):
    """Raised when a user cannot be authenticated."""

    kind = ErrorKind.AUTHENTICATION


@dataclass
class ErrorBody:
    """Uniform error payload handed to the outer layer."""
    status: int
    error: str
    message: str
    path: str
    details: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        body: Dict[str, object] = {
            "status": self.status,
            "error": self.error,
            "message": self.message,
            "path": self.path,
        }
        if self.details:
            body["details"] = list(self.details)
        return body


def status_for(error: BaseException) -> Tuple[int, str]:
    """Look up the status code and title for an exception."""
    if isinstance(error, DomainError):
        return ERROR_STATUS.get(getattr(error, "kind", None), INTERNAL_ERROR)
    return INTERNAL_ERROR


def to_error_body(
    error: BaseException,
    path: str,
    details: Optional[List[str]] = None,
) -> ErrorBody:
    """Translate an exception into the uniform error body."""
    status, title = status_for(error)
    message = str(error) if isinstance(error, DomainError) else "Unexpected error"
    return ErrorBody(
        status=status,
        error=title,
        message=message,
        path=path,
        details=list(details or []),
    )
