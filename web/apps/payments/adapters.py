"""In-process stub for the payment processor port.

``IntentGatewayStub`` implements ``IntentGatewayPort`` without any network
call. It is used by tests and local development where deterministic
behavior is useful and no processor account is available.
"""

import uuid
from typing import Optional

from apps.common import errors

from .domain import IntentGatewayPort


class IntentGatewayStub(IntentGatewayPort):
    """Stub implementation of ``IntentGatewayPort``.

    Issues a processor-shaped client secret for positive amounts and fails
    like the real gateway for anything else. The same idempotency key
    returns the same secret.
    """

    def __init__(self):
        self._by_key: dict[str, str] = {}

    def create_intent(
        self,
        amount_minor: int,
        currency: str,
        product_id: str,
        idempotency_key: Optional[str] = None,
    ) -> str:
        if amount_minor <= 0:
            raise errors.GatewayError()
        if idempotency_key and idempotency_key in self._by_key:
            return self._by_key[idempotency_key]
        secret = f"pi_{uuid.uuid4().hex[:24]}_secret_{uuid.uuid4().hex[:24]}"
        if idempotency_key:
            self._by_key[idempotency_key] = secret
        return secret
