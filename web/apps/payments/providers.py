"""Service provider helpers for wiring the payment services with ports.

``get_intent_service`` returns a ``PaymentIntentService`` backed by the HTTP
processor client when ``settings.USE_HTTP_ADAPTERS`` is truthy, or by the
in-process stub otherwise (tests, local development). The processor's
circuit breaker is owned here and handed to each client, so its state is
shared across requests of one worker process.
"""

from functools import lru_cache

from django.conf import settings
from django.utils import timezone

from .adapters import IntentGatewayStub
from .domain import PaymentIntentService, PaymentRecorder
from .http_adapters import CircuitBreaker, StripeIntentClient, processor_breaker_from_settings
from .repository import PaymentRepository


@lru_cache(maxsize=1)
def get_processor_breaker() -> CircuitBreaker:
    """Return the worker's breaker for the payment processor."""
    return processor_breaker_from_settings()


def get_intent_service() -> PaymentIntentService:
    """Return a configured PaymentIntentService instance."""
    if getattr(settings, "USE_HTTP_ADAPTERS", True):
        gateway = StripeIntentClient(breaker=get_processor_breaker())
    else:
        gateway = IntentGatewayStub()
    return PaymentIntentService(gateway=gateway, currency=settings.PAYMENT_INTENT_CURRENCY)


def get_payment_recorder() -> PaymentRecorder:
    """Return a PaymentRecorder backed by the Django payment repository."""
    return PaymentRecorder(payments=PaymentRepository(), clock=timezone.now)
