"""Domain exceptions mapped to HTTP responses by ``main``."""

from __future__ import annotations


class CateringError(Exception):
    """Base class for errors raised by repositories and services."""

    status_code = 500

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class ValidationError(CateringError, ValueError):
    """Input is missing or out of range."""

    status_code = 400


class ForbiddenError(CateringError):
    """The caller is neither the owner nor an administrator."""

    status_code = 403


class NotFoundError(CateringError):
    """No record matches the requested identifier."""

    status_code = 404


class ConflictError(CateringError):
    """A uniqueness rule or slot reservation would be violated."""

    status_code = 409


__all__ = [
    "CateringError",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "ValidationError",
]
