import uuid

from django.db import models


class Account(models.Model):
    """Marketplace user. ``email`` is the identity used across the stores."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Role(models.TextChoices):
        BUYER = "buyer"
        MANAGER = "manager"
        ADMIN = "admin"

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=200, blank=True, default="")
    photo_url = models.URLField(max_length=500, blank=True, default="")
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.BUYER)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "users"
        ordering = ["-created_at"]
