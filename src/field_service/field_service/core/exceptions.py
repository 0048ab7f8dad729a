from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ApiError(DomainError):
    """Raised when the backend answers a request with a failure status."""

    def __init__(self, message: str, *, status: int = 0, path: str = ""):
        super().__init__(message)
        self.status = int(status)
        self.path = path


class AuthorizationError(ApiError):
    """Raised on 401/403 responses."""


class NotFoundError(ApiError):
    """Raised on 404 responses."""


class BackendUnavailableError(ApiError):
    """Raised when the backend cannot be reached at all (status 0)."""
