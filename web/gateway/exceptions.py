"""DRF exception handler for the marketplace API.

Views let domain errors propagate; this handler is the single request
boundary that turns them into JSON responses. Every failure body has the
same shape, ``{"success": false, "message": <stable string>}``, and never
carries a traceback or internal identifier.
"""

import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.common import errors

logger = logging.getLogger("gateway")


def _failure(message: str, status_code: int) -> Response:
    return Response({"success": False, "message": message}, status=status_code)


def api_exception_handler(exc, context):
    """Map an exception raised inside an APIView to an HTTP response.

    Args:
        exc: The exception raised by the view.
        context: DRF handler context (view, request, args, kwargs).

    Returns:
        Response: Always a response; unknown exceptions become HTTP 500.
    """
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else "-"

    if isinstance(exc, errors.FatalInconsistencyError):
        logger.error(
            "partial write requires manual reconciliation",
            extra={"view": view_name, "reason": exc.message, **exc.context},
        )
        return _failure(exc.message, exc.status_code)

    if isinstance(exc, errors.MarketplaceError):
        if exc.status_code >= 500:
            logger.error("request failed", extra={"view": view_name, "reason": exc.message})
        else:
            logger.info(
                "request rejected",
                extra={"view": view_name, "reason": exc.message, "status": exc.status_code},
            )
        return _failure(exc.message, exc.status_code)

    response = drf_exception_handler(exc, context)
    if response is None:
        logger.error("unhandled error", extra={"view": view_name}, exc_info=exc)
        return _failure("internal server error", 500)

    detail = response.data.get("detail") if isinstance(response.data, dict) else None
    response.data = {"success": False, "message": str(detail) if detail else "request failed"}
    return response
