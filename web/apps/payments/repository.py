"""Repository layer for payment records.

The existence check in ``PaymentRecorder`` handles the common duplicate;
the unique constraint on ``transaction_id`` catches the concurrent one.
The insert runs in a nested savepoint so an ``IntegrityError`` only rolls
back that block.
"""

from django.db import IntegrityError, transaction

from apps.common import errors
from apps.common.identifiers import parse_id

from .domain import PaymentRecord, PaymentStorePort
from .models import PaymentModel


class PaymentRepository(PaymentStorePort):
    """Repository that persists PaymentRecord objects using Django ORM."""

    def exists(self, transaction_id: str) -> bool:
        return PaymentModel.objects.filter(transaction_id=transaction_id).exists()

    def create(self, record: PaymentRecord) -> str:
        product_id = parse_id(record.product_id)
        try:
            with transaction.atomic():
                obj = PaymentModel.objects.create(
                    product_id=product_id,
                    buyer_email=record.buyer_email,
                    amount=record.amount,
                    currency=record.currency,
                    transaction_id=record.transaction_id,
                    payment_method=record.payment_method,
                    payment_status=record.payment_status,
                    created_at=record.created_at,
                )
        except IntegrityError:
            raise errors.ConflictError("payment already recorded") from None
        return str(obj.id)
