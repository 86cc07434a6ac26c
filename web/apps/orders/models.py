import uuid

from django.db import models


class OrderModel(models.Model):
    # UUID PK exposed in the API
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Status(models.TextChoices):
        PENDING = "pending"
        APPROVED = "approved"
        REJECTED = "rejected"

    class PaymentOption(models.TextChoices):
        CASH_ON_DELIVERY = "CashOnDelivery"
        PREPAID = "Prepaid"

    class PaymentStatus(models.TextChoices):
        PENDING = "pending"
        PAID = "paid"

    # Weak reference to catalog.Product; orders outlive product deletion
    product_id = models.UUIDField(db_index=True)
    buyer_email = models.EmailField()
    order_quantity = models.PositiveIntegerField()
    total_price = models.DecimalField(max_digits=12, decimal_places=2)
    payment_option = models.CharField(max_length=32, choices=PaymentOption.choices)
    payment_status = models.CharField(max_length=16, choices=PaymentStatus.choices)
    transaction_id = models.CharField(max_length=255, null=True, blank=True)
    order_status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    order_to = models.EmailField()
    created_at = models.DateTimeField()
    approved_at = models.DateTimeField(null=True, blank=True)
    rejected_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["order_to", "order_status"], name="orders_manager_status_idx"),
        ]
