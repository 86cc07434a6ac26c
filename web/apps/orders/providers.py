"""Service provider for wiring OrderLifecycleManager with its ports.

``get_order_service`` builds a configured ``OrderLifecycleManager`` per
request from settings: the Django-backed catalog accessor and order
repository, ``transaction.atomic`` as the unit of work, and the placement
mode selected by ``settings.ATOMIC_ORDER_PLACEMENT``.
"""

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.catalog.accessor import CatalogAccessor

from .domain import OrderLifecycleManager
from .repository import OrderRepository


def get_order_service() -> OrderLifecycleManager:
    """Return a configured OrderLifecycleManager instance."""
    return OrderLifecycleManager(
        catalog=CatalogAccessor(),
        orders=OrderRepository(),
        atomic=getattr(settings, "ATOMIC_ORDER_PLACEMENT", True),
        transaction=transaction.atomic,
        clock=timezone.now,
    )
