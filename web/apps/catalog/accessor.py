"""Catalog accessor consumed by the order lifecycle.

Implements ``CatalogPort`` on top of the Django ORM. The accessor exposes
only the two operations the core needs: reading a product snapshot and
decrementing stock. The decrement is a single conditional ``UPDATE`` so the
``quantity >= 0`` invariant holds under concurrent buyers without a lock.
"""

from typing import Optional

from django.db.models import F

from apps.common.identifiers import parse_id
from apps.orders.domain import CatalogPort, ProductSnapshot

from .models import Product


class CatalogAccessor(CatalogPort):
    """Django-backed ``CatalogPort``."""

    def find_by_id(self, product_id: str) -> Optional[ProductSnapshot]:
        """Return a snapshot of the product, or None when it does not exist.

        Raises:
            ValidationError: ``product_id`` is not a valid identifier.
        """
        obj = Product.objects.filter(id=parse_id(product_id)).first()
        if obj is None:
            return None
        return ProductSnapshot(
            id=str(obj.id),
            quantity=obj.quantity,
            moq=obj.moq,
            owner=obj.owner,
            status=obj.status,
        )

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        """Decrement stock by ``quantity`` if at least that much is left.

        Returns:
            bool: True when one row was updated, False otherwise (missing
            product or insufficient stock; nothing is changed).
        """
        updated = Product.objects.filter(id=parse_id(product_id), quantity__gte=quantity).update(
            quantity=F("quantity") - quantity
        )
        return updated == 1
