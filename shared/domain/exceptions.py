"""
Domain Errors

Errors raised by domain services. They carry the HTTP status the API layer
answers with; ``shared.infrastructure.exception_handler`` performs the
translation so services never build responses themselves.
"""

from rest_framework import status  # type: ignore


class DomainError(Exception):
    """Base class for errors a caller can act upon."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ResourceNotFound(DomainError):
    """
    Resource is missing or belongs to someone else.

    Both cases share one error so that resource existence is never leaked
    across tenants and owners.
    """

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found or access denied"


class StateConflict(DomainError):
    """Valid request that contradicts the current lifecycle state."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Request conflicts with the current state"
