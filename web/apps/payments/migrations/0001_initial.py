import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PaymentModel",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("product_id", models.UUIDField(db_index=True)),
                ("buyer_email", models.EmailField(max_length=254)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("currency", models.CharField(default="BDT", max_length=8)),
                ("transaction_id", models.CharField(max_length=255, unique=True)),
                ("payment_method", models.CharField(default="card", max_length=32)),
                ("payment_status", models.CharField(default="succeeded", max_length=16)),
                ("created_at", models.DateTimeField()),
            ],
            options={
                "db_table": "payments",
                "ordering": ["-created_at"],
            },
        ),
    ]
