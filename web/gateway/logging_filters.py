"""Logging filters for enriching log records with request context.

The filter injects the current request id into log records using the
ContextVar set by the gateway middleware. It is wired into the ``LOGGING``
dictConfig so the JSON formatter can always reference ``%(request_id)s``.
"""

from logging import Filter, LogRecord

from .middleware import REQUEST_ID_CTX


class RequestIdFilter(Filter):
    """Attach a ``request_id`` attribute to log records.

    Outside of a request (management commands, startup) the ContextVar
    default ``"-"`` is used as a placeholder.
    """

    def filter(self, record: LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = REQUEST_ID_CTX.get()
        return True
