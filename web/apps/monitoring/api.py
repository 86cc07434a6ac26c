import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse

logger = logging.getLogger("gateway")


def root_view(_request):
    return JsonResponse({"message": "Marketplace server"})


def health_view(_request):
    """Liveness/readiness probe: 200 when the database answers, 503 otherwise."""
    try:
        with connection.cursor() as cur:
            cur.execute("SELECT 1;")
        db_ok = True
    except DatabaseError:
        logger.warning("health check: database unavailable")
        db_ok = False

    return JsonResponse(
        {"ok": db_ok, "components": {"db": {"ok": db_ok}}},
        status=200 if db_ok else 503,
    )
