"""Error taxonomy shared by the marketplace apps.

Each error carries the HTTP status it maps to at the request boundary
(``gateway.exceptions``) and a machine-stable ``message`` returned verbatim
to clients.
"""


class MarketplaceError(Exception):
    """Base class for failures surfaced to API clients."""

    status_code = 500
    default_message = "internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(MarketplaceError):
    """Malformed or incomplete input."""

    status_code = 400
    default_message = "invalid request"


class NotFoundError(MarketplaceError):
    """Referenced entity is absent or already left the state the call needs."""

    status_code = 404
    default_message = "not found"


class ConflictError(MarketplaceError):
    """Idempotency or state-guard violation."""

    status_code = 409
    default_message = "conflict"


class GatewayError(MarketplaceError):
    """The external payment processor failed or is unreachable."""

    status_code = 500
    default_message = "payment gateway error"


class FatalInconsistencyError(MarketplaceError):
    """A multi-step write stopped half way.

    ``context`` holds the identifiers an operator needs to reconcile the
    stores by hand. It is logged, never sent to the client.
    """

    status_code = 500
    default_message = "order recorded but stock update failed"

    def __init__(self, message: str | None = None, **context):
        super().__init__(message)
        self.context = context
