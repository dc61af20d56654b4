"""DRF exception handler rendering domain errors as API responses."""

from __future__ import annotations

import structlog
from django.db import DatabaseError, IntegrityError  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler as drf_exception_handler  # type: ignore

from shared.domain.errors import DomainError, DuplicateKey, InternalError

logger = structlog.get_logger(__name__)


def _view_name(context) -> str:
    view = context.get("view") if context else None
    return view.__class__.__name__ if view is not None else "unknown"


def domain_exception_handler(exc, context):  # type: ignore
    """Map exceptions to ``{"error": ..., "code": ...}`` responses.

    DRF's own exceptions (authentication, permission, serializer
    validation, 404) keep the stock handling. Storage unique violations
    become ``DuplicateKey``; anything else is logged and answered with a
    generic ``InternalError``.
    """
    response = drf_exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, DomainError):
        if isinstance(exc, InternalError):
            logger.error("api.internal_error", view=_view_name(context), code=exc.code)
        else:
            logger.info("api.domain_error", view=_view_name(context), code=exc.code, status=exc.status_code)
        return Response(exc.to_dict(), status=exc.status_code)

    if isinstance(exc, IntegrityError):
        logger.warning("api.integrity_error", view=_view_name(context), error=str(exc))
        error = DuplicateKey()
        return Response(error.to_dict(), status=error.status_code)

    if isinstance(exc, DatabaseError):
        logger.error("api.database_error", view=_view_name(context), exc_info=exc)
    else:
        logger.error("api.unexpected_error", view=_view_name(context), exc_info=exc)
    error = InternalError()
    return Response(error.to_dict(), status=error.status_code)
