"""Domain exceptions raised by services and stores.

Each exception carries the HTTP status it maps to so the API error handlers
can translate it without per-route try/except blocks.
"""

from __future__ import annotations

from fastapi import status


class TaskflowError(Exception):
    """Base exception for domain and storage failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(TaskflowError):
    """Raised when a task or project id does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class EmptyStackError(TaskflowError):
    """Raised when undo or redo is requested with nothing to act on."""

    status_code = status.HTTP_400_BAD_REQUEST


class ProtectedResourceError(TaskflowError):
    """Raised when deleting a resource that must always exist."""

    status_code = status.HTTP_400_BAD_REQUEST


class StoreUnavailableError(TaskflowError):
    """Raised when the backing file or database cannot be read or written."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class InvalidPayloadError(TaskflowError):
    """Raised when imported records cannot be coerced into valid tasks."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
