# exceptions.py
"""
Domain exceptions and the REST framework exception handler.

Services raise these; ``custom_exception_handler`` turns them into the
JSON error shapes used across the API.
"""

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from classifiedsutils.logging import get_logger

logger = get_logger(__name__)


class ClassifiedsError(Exception):
    """Base class for marketplace errors."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def as_payload(self) -> dict:
        return {"error": self.message}


class ListingValidationError(ClassifiedsError):
    """Listing content or uploaded images failed validation."""

    default_message = "Invalid listing data"

    def __init__(self, errors: dict, message: str | None = None):
        self.errors = errors
        super().__init__(message)

    def as_payload(self) -> dict:
        return {"error": self.message, "errors": self.errors}


class ListingNotFoundError(ClassifiedsError):
    """The listing does not exist or does not belong to the caller."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Listing not found or unauthorized"


class TwoFactorError(ClassifiedsError):
    """Two-factor setup or verification failed."""


class ModerationOracleError(Exception):
    """
    The moderation oracle could not produce a verdict.

    Raised inside the oracle client only; it is always converted into a
    fail-closed verdict and never reaches a view.
    """


def custom_exception_handler(exc, context):
    """
    Map domain exceptions to responses, defer everything else to DRF.

    Store failures are logged with their traceback and reported without
    internal detail.
    """
    if isinstance(exc, ClassifiedsError):
        return Response(exc.as_payload(), status=exc.status_code)

    if isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.error(
            "database_error",
            view=view.__class__.__name__ if view else None,
            error=str(exc),
            exc_info=exc,
        )
        return Response(
            {"error": "Internal server error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return exception_handler(exc, context)
