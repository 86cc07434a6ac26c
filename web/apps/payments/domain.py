"""Domain models, ports and services for payments.

Two services live here:

- ``PaymentRecorder`` stores one confirmation record per processor
  transaction id. Recording the same transaction twice is a conflict, not a
  second record.
- ``PaymentIntentService`` asks the external processor for a client-side
  payment handle (client secret) for a product purchase.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional, Protocol

from apps.common import errors

logger = logging.getLogger("payments")

DEFAULT_CURRENCY = "BDT"
DEFAULT_PAYMENT_METHOD = "card"
SUCCEEDED = "succeeded"


@dataclass
class RecordPaymentCommand:
    product_id: Optional[str] = None
    buyer_email: Optional[str] = None
    amount: Optional[Decimal] = None
    transaction_id: Optional[str] = None
    currency: str = DEFAULT_CURRENCY
    payment_method: str = DEFAULT_PAYMENT_METHOD


@dataclass(frozen=True)
class PaymentRecord:
    """An immutable payment confirmation.

    Attributes:
        id: Persistent identifier, or None before the record is stored.
        transaction_id: Processor transaction id (unique across records).
        amount: Amount in major currency units.
    """

    id: Optional[str]
    product_id: str
    buyer_email: str
    amount: Decimal
    currency: str
    transaction_id: str
    payment_method: str
    payment_status: str
    created_at: datetime


# ---- Ports (DIP) ----
class PaymentStorePort(Protocol):
    def exists(self, transaction_id: str) -> bool:
        """True when a record for ``transaction_id`` is already stored."""
        raise NotImplementedError()

    def create(self, record: PaymentRecord) -> str:
        """Persist ``record`` and return its identifier.

        Raises:
            ConflictError: A record with the same transaction id was stored
                concurrently.
        """
        raise NotImplementedError()


class IntentGatewayPort(Protocol):
    """Port for the external payment processor."""

    def create_intent(
        self,
        amount_minor: int,
        currency: str,
        product_id: str,
        idempotency_key: Optional[str] = None,
    ) -> str:
        """Create a payment intent and return its client secret verbatim.

        Raises:
            GatewayError: On any processor-side failure.
        """
        raise NotImplementedError()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit amount to the processor's integer minor units.

    Multiplies by 100 and rounds half away from zero, so ``12.345`` becomes
    ``1235``.
    """
    cents = (Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(cents)


# ---- Domain services ----
class PaymentRecorder:
    """Records payment confirmations, at most one per transaction id."""

    def __init__(self, payments: PaymentStorePort, clock: Optional[Callable[[], datetime]] = None):
        self.payments = payments
        self.clock = clock or _utcnow

    def record_payment(self, cmd: RecordPaymentCommand) -> str:
        """Persist a confirmed payment.

        Args:
            cmd: Payment confirmation; ``currency`` and ``payment_method``
                default to ``BDT`` and ``card``.

        Returns:
            str: Identifier of the new payment record.

        Raises:
            ValidationError: ``missing payment fields``.
            ConflictError: ``payment already recorded`` for a known
                transaction id; nothing is written.
        """
        if not cmd.product_id or not cmd.buyer_email or cmd.amount is None or not cmd.transaction_id:
            raise errors.ValidationError("missing payment fields")

        if self.payments.exists(cmd.transaction_id):
            logger.info("duplicate payment ignored", extra={"transaction_id": cmd.transaction_id})
            raise errors.ConflictError("payment already recorded")

        record = PaymentRecord(
            id=None,
            product_id=cmd.product_id,
            buyer_email=cmd.buyer_email,
            amount=cmd.amount,
            currency=cmd.currency or DEFAULT_CURRENCY,
            transaction_id=cmd.transaction_id,
            payment_method=cmd.payment_method or DEFAULT_PAYMENT_METHOD,
            payment_status=SUCCEEDED,
            created_at=self.clock(),
        )
        payment_id = self.payments.create(record)
        logger.info(
            "payment recorded",
            extra={"payment_id": payment_id, "transaction_id": record.transaction_id},
        )
        return payment_id


class PaymentIntentService:
    """Obtains a client secret from the processor for a purchase.

    Single attempt, fail fast: gateway failures are not retried.
    """

    def __init__(self, gateway: IntentGatewayPort, currency: str):
        self.gateway = gateway
        self.currency = currency

    def create_intent(
        self,
        amount: Optional[Decimal],
        product_id: Optional[str],
        idempotency_key: Optional[str] = None,
    ) -> str:
        """Request a payment intent for ``amount`` (major units).

        Raises:
            ValidationError: ``missing payment info`` or a non-positive amount.
            GatewayError: The processor call failed.
        """
        if amount is None or not product_id:
            raise errors.ValidationError("missing payment info")
        if amount <= 0:
            raise errors.ValidationError("invalid payment amount")

        return self.gateway.create_intent(
            to_minor_units(amount),
            self.currency,
            str(product_id),
            idempotency_key=idempotency_key,
        )
