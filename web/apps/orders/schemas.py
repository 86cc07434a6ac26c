"""Pydantic schemas for orders.

Request bodies use the camelCase field names of the public API
(``productId``, ``orderQuantity``...); snake_case names are accepted too.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic.alias_generators import to_camel

from .domain import CreateOrderCommand, Order, PaymentOption


class CreateOrderDTO(BaseModel):
    """Schema for an order submission.

    Required fields are declared optional: their presence is a business
    rule checked by ``OrderLifecycleManager.create_order`` so that a missing
    field and a malformed one produce distinct errors.

    Attributes:
        product_id: Identifier of the ordered product.
        buyer_email: Buyer identity.
        order_quantity: Units requested; booleans and numeric strings are rejected.
        total_price: Non-negative total in major currency units, at most
            12 digits with 2 decimal places (the column precision).
        payment_option: ``CashOnDelivery`` or ``Prepaid`` (default).
        transaction_id: Processor transaction id for prepaid orders.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: Optional[str] = None
    buyer_email: Optional[str] = None
    order_quantity: Optional[StrictInt] = None
    total_price: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    payment_option: Optional[PaymentOption] = None
    transaction_id: Optional[str] = None

    @field_validator("product_id", "buyer_email", "transaction_id")
    @classmethod
    def strip_blank(cls, v: Optional[str]) -> Optional[str]:
        """Normalize surrounding whitespace; blank strings count as absent."""
        if v is None:
            return v
        return v.strip() or None

    def to_command(self) -> CreateOrderCommand:
        return CreateOrderCommand(
            product_id=self.product_id,
            buyer_email=self.buyer_email,
            order_quantity=self.order_quantity,
            total_price=self.total_price,
            payment_option=self.payment_option or PaymentOption.PREPAID,
            transaction_id=self.transaction_id,
        )


class OrderReadDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    product_id: str
    buyer_email: str
    order_quantity: int
    total_price: float
    payment_option: str
    payment_status: str
    transaction_id: Optional[str] = None
    order_status: str
    order_to: str
    created_at: datetime
    approved_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, order: Order) -> "OrderReadDTO":
        return cls(
            id=order.id,
            product_id=order.product_id,
            buyer_email=order.buyer_email,
            order_quantity=order.order_quantity,
            total_price=float(order.total_price),
            payment_option=order.payment_option.value,
            payment_status=order.payment_status.value,
            transaction_id=order.transaction_id,
            order_status=order.order_status.value,
            order_to=order.order_to,
            created_at=order.created_at,
            approved_at=order.approved_at,
            rejected_at=order.rejected_at,
        )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
