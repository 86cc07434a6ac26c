"""HTTP client for the external payment processor.

Implements ``IntentGatewayPort`` against the processor's REST API
(``POST /v1/payment_intents``, form-encoded, secret key as basic-auth user)
using ``httpx``. It adds:

- A circuit breaker around the processor so a failing dependency is not
  hammered; while OPEN, calls fail immediately. After ``reset_timeout`` a
  single HALF_OPEN probe is let through.
- Idempotency: a client-supplied ``Idempotency-Key`` is forwarded so a
  retried request does not create a second intent.

Each request is a single attempt. Every failure surfaces as ``GatewayError``.
"""

import logging
import threading
import time
from typing import Optional

import httpx
from django.conf import settings

from apps.common import errors

from .domain import IntentGatewayPort

logger = logging.getLogger("payments")


# ---------------- Circuit Breaker ---------------- #

class CircuitBreaker:
    """Minimal circuit breaker with CLOSED/OPEN/HALF_OPEN states.

    Transitions:
    - CLOSED → OPEN when failures reach ``fail_threshold``.
    - OPEN → HALF_OPEN after ``reset_timeout`` seconds.
    - HALF_OPEN → CLOSED on a successful probe; stays HALF_OPEN while a
      single probe is in flight; transitions back to OPEN on failure.

    This implementation is thread-safe via an internal lock.
    """

    def __init__(self, name: str, fail_threshold: int, reset_timeout: float):
        self.name = name
        self.fail_threshold = fail_threshold
        self.reset_timeout = reset_timeout
        self._lock = threading.RLock()
        self._failures = 0
        self._state = "CLOSED"  # CLOSED | OPEN | HALF_OPEN
        self._opened_at = 0.0
        self._half_open_probe_in_flight = False

    @property
    def state(self) -> str:
        """Current breaker state with time-based transition handling."""
        with self._lock:
            if self._state == "OPEN" and (time.monotonic() - self._opened_at) >= self.reset_timeout:
                self._state = "HALF_OPEN"
                self._half_open_probe_in_flight = False
            return self._state

    def before_call(self) -> str:
        """Check and update state before a protected call.

        Raises:
            RuntimeError: If the circuit is OPEN or a HALF_OPEN probe is busy.
        """
        with self._lock:
            st = self.state
            if st == "OPEN":
                raise RuntimeError("CIRCUIT_OPEN")
            if st == "HALF_OPEN":
                if self._half_open_probe_in_flight:
                    raise RuntimeError("CIRCUIT_HALF_OPEN_BUSY")
                self._half_open_probe_in_flight = True
            return st

    def on_success(self):
        """Record a successful call and close/reset the breaker."""
        with self._lock:
            self._failures = 0
            self._state = "CLOSED"
            self._half_open_probe_in_flight = False

    def on_failure(self):
        """Record a failed call and open the breaker if threshold exceeded."""
        with self._lock:
            self._failures += 1
            if self._state == "HALF_OPEN" or (
                self._failures >= self.fail_threshold and self._state != "OPEN"
            ):
                self._state = "OPEN"
                self._opened_at = time.monotonic()
                self._half_open_probe_in_flight = False

    def on_finish(self):
        """Release any HALF_OPEN probe flag after a call finishes."""
        with self._lock:
            if self._state == "HALF_OPEN":
                self._half_open_probe_in_flight = False


def processor_breaker_from_settings() -> CircuitBreaker:
    """Build a breaker for the payment processor from the ``HTTP_CIRCUIT_*`` settings."""
    return CircuitBreaker(
        "payment-processor",
        getattr(settings, "HTTP_CIRCUIT_FAIL_THRESHOLD", 5),
        getattr(settings, "HTTP_CIRCUIT_RESET_TIMEOUT", 30.0),
    )


def _processor_message(resp: httpx.Response) -> str:
    """Best-effort extraction of the processor's error message for logs."""
    try:
        return str(resp.json().get("error", {}).get("message", ""))
    except (ValueError, AttributeError):
        return ""


# ---------------- Processor Adapter ---------------- #

class StripeIntentClient(IntentGatewayPort):
    """Payment-intent client for a Stripe-compatible processor API.

    The circuit breaker is injected so that its state can outlive a single
    client; without one the client gets a fresh breaker of its own.
    """

    def __init__(
        self,
        secret_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        breaker: CircuitBreaker | None = None,
    ):
        self.secret_key = secret_key if secret_key is not None else settings.STRIPE_SECRET_KEY
        self.base_url = (base_url or settings.STRIPE_API_BASE).rstrip("/")
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECS
        self.breaker = breaker or processor_breaker_from_settings()

    def create_intent(
        self,
        amount_minor: int,
        currency: str,
        product_id: str,
        idempotency_key: Optional[str] = None,
    ) -> str:
        """Create a payment intent and return its ``client_secret``.

        Business mappings:
        - 200 → the ``client_secret`` field, verbatim.
        - 4xx except 429 → GatewayError; a processor-side rejection of the
          request, not counted as a circuit failure.
        - 429, 5xx, transport errors or a 200 without a client secret →
          GatewayError and a circuit failure.

        Args:
            amount_minor: Amount in the currency's minor unit.
            currency: Settlement currency code.
            product_id: Attached to the intent as ``metadata[productId]``.
            idempotency_key: Optional key forwarded as ``Idempotency-Key``.

        Raises:
            GatewayError: On any failure, including an open circuit.
        """
        if not self.secret_key:
            logger.error("payment processor secret key is not configured")
            raise errors.GatewayError("payment gateway not configured")

        try:
            self.breaker.before_call()
        except RuntimeError as exc:
            logger.warning("payment processor circuit open", extra={"breaker": str(exc)})
            raise errors.GatewayError("payment gateway unavailable") from exc

        form = {
            "amount": str(amount_minor),
            "currency": currency,
            "payment_method_types[]": "card",
            "metadata[productId]": product_id,
        }
        headers = {"Idempotency-Key": idempotency_key} if idempotency_key else None

        try:
            try:
                with httpx.Client(timeout=self.timeout) as client:
                    resp = client.post(
                        f"{self.base_url}/v1/payment_intents",
                        data=form,
                        headers=headers,
                        auth=(self.secret_key, ""),
                    )
            except httpx.RequestError as exc:
                self.breaker.on_failure()
                logger.error("payment processor unreachable", extra={"error": type(exc).__name__})
                raise errors.GatewayError() from exc

            if resp.status_code == 200:
                try:
                    secret = resp.json().get("client_secret")
                except ValueError:
                    secret = None
                if not secret:
                    self.breaker.on_failure()
                    logger.error("payment processor returned no client secret")
                    raise errors.GatewayError()
                self.breaker.on_success()
                return secret

            processor_message = _processor_message(resp)
            if 400 <= resp.status_code < 500 and resp.status_code != 429:
                self.breaker.on_success()  # business outcome, not a circuit failure
            else:
                self.breaker.on_failure()
            logger.error(
                "payment intent rejected by processor",
                extra={"status": resp.status_code, "processor_message": processor_message},
            )
            raise errors.GatewayError()
        finally:
            self.breaker.on_finish()
