"""Middleware that assigns and propagates a request identifier.

Every incoming HTTP request receives a request identifier (UUID). The
identifier is read from the incoming ``X-Request-Id`` header when provided by
the client, or generated server-side otherwise. The middleware stores the id on
the ``request`` object and in a context variable so code running downstream
(services, repositories, log filters) can read it without passing it around.

Behavior contract:
- If the incoming request contains the ``X-Request-Id`` header, that value
  is reused as the request id.
- Otherwise a new UUIDv4 is generated.
- The response will include the same id in the ``X-Request-ID`` header.
- One ``request handled`` line is logged per request.
"""

import contextvars
import logging
import os
import uuid

from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin

REQUEST_ID_CTX = contextvars.ContextVar("request_id", default="-")
MAX_API_BYTES = int(os.getenv("API_MAX_BYTES", str(1 * 1024 * 1024)))

logger = logging.getLogger("gateway")


class RequestIdMiddleware(MiddlewareMixin):
    """Django middleware that sets and returns a per-request identifier.

    Attributes:
        HEADER (str): The name of the incoming HTTP header (in Django's
            ``request.META`` casing) that may contain a client-provided id.
        RESPONSE_HEADER (str): The name of the header returned on responses.
    """

    HEADER = "HTTP_X_REQUEST_ID"
    RESPONSE_HEADER = "X-Request-ID"

    def process_request(self, request):
        """Attach the request id to ``request.request_id`` and the ContextVar."""
        rid = request.META.get(self.HEADER)
        if not rid:
            rid = str(uuid.uuid4())
        request.request_id = rid
        REQUEST_ID_CTX.set(rid)

    def process_response(self, request, response):
        """Echo the request id on the response and log the request.

        The id attached to the request object is preferred; the ContextVar
        value is the fallback for responses produced before
        ``process_request`` ran.
        """
        rid = getattr(request, "request_id", REQUEST_ID_CTX.get())
        response[self.RESPONSE_HEADER] = rid
        logger.info(
            "request handled",
            extra={"path": request.path, "method": request.method, "status": response.status_code},
        )
        return response


class ApiSizeLimitMiddleware(MiddlewareMixin):
    """Reject request bodies larger than ``API_MAX_BYTES`` with HTTP 413."""

    BODY_METHODS = ("POST", "PUT", "PATCH")

    def process_request(self, request):
        if request.method in self.BODY_METHODS:
            clen = request.META.get("CONTENT_LENGTH")
            if clen and clen.isdigit() and int(clen) > MAX_API_BYTES:
                return JsonResponse({"success": False, "message": "payload too large"}, status=413)
