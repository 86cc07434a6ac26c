import uuid

from django.db import models


class PaymentModel(models.Model):
    """Stored payment confirmation. Rows are never updated after insert."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product_id = models.UUIDField(db_index=True)
    buyer_email = models.EmailField()
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=8, default="BDT")
    # One record per processor transaction
    transaction_id = models.CharField(max_length=255, unique=True)
    payment_method = models.CharField(max_length=32, default="card")
    payment_status = models.CharField(max_length=16, default="succeeded")
    created_at = models.DateTimeField()

    class Meta:
        db_table = "payments"
        ordering = ["-created_at"]
