"""Pydantic schemas for the payment endpoints.

As with orders, required fields are declared optional so the services can
report a missing field with their own stable message.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from apps.common.identifiers import parse_id

from .domain import DEFAULT_CURRENCY, DEFAULT_PAYMENT_METHOD, RecordPaymentCommand


class CreatePaymentIntentDTO(BaseModel):
    """Schema for requesting a payment intent.

    Attributes:
        amount: Amount in major currency units.
        product_id: Product the payment is for (attached as metadata).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    amount: Optional[Decimal] = None
    product_id: Optional[str] = None


class RecordPaymentDTO(BaseModel):
    """Schema for a payment confirmation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: Optional[str] = None
    buyer_email: Optional[str] = None
    amount: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    transaction_id: Optional[str] = None
    currency: str = Field(default=DEFAULT_CURRENCY, min_length=3, max_length=8)
    payment_method: str = Field(default=DEFAULT_PAYMENT_METHOD, min_length=1, max_length=32)

    def to_command(self) -> RecordPaymentCommand:
        """Build the command; a malformed ``productId`` is rejected here.

        Raises:
            ValidationError: ``invalid id format``.
        """
        return RecordPaymentCommand(
            product_id=str(parse_id(self.product_id)) if self.product_id else None,
            buyer_email=self.buyer_email,
            amount=self.amount,
            transaction_id=self.transaction_id,
            currency=self.currency.upper(),
            payment_method=self.payment_method,
        )
