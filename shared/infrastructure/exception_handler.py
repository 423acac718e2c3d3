"""DRF exception handler translating domain and store errors into JSON."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from django.db import DatabaseError  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.exceptions import DomainError

logger = logging.getLogger(__name__)


def domain_exception_handler(exc, context):  # type: ignore
    """Extend DRF's handler with domain errors and a generic 500."""

    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, DomainError):
        return Response({"error": exc.message}, status=exc.status_code)

    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else "unknown"
    if isinstance(exc, DatabaseError):
        logger.error("Database error in %s: %s", view_name, exc, exc_info=True)
    else:
        logger.exception("Unhandled error in %s", view_name)

    body = {"error": "Internal server error"}
    if settings.DEBUG:
        body["details"] = str(exc)
    return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
