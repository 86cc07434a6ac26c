import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="OrderModel",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("product_id", models.UUIDField(db_index=True)),
                ("buyer_email", models.EmailField(max_length=254)),
                ("order_quantity", models.PositiveIntegerField()),
                ("total_price", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "payment_option",
                    models.CharField(
                        choices=[("CashOnDelivery", "Cash On Delivery"), ("Prepaid", "Prepaid")],
                        max_length=32,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(choices=[("pending", "Pending"), ("paid", "Paid")], max_length=16),
                ),
                ("transaction_id", models.CharField(blank=True, max_length=255, null=True)),
                (
                    "order_status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("order_to", models.EmailField(max_length=254)),
                ("created_at", models.DateTimeField()),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("rejected_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "db_table": "orders",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["order_to", "order_status"], name="orders_manager_status_idx"),
                ],
            },
        ),
    ]
