"""Repository layer for persisting orders.

``OrderRepository`` implements ``OrderStorePort`` with the Django ORM. It
maps between ``OrderModel`` rows and domain ``Order`` objects so the domain
layer is not coupled to ORM types. Identifiers cross the boundary as
strings and are parsed here into the store's UUID keys.
"""

from datetime import datetime
from typing import List, Optional

from apps.common.identifiers import parse_id

from .domain import Order, OrderStatus, OrderStorePort, PaymentOption, PaymentStatus
from .models import OrderModel

_STAMP_FIELDS = {
    OrderStatus.APPROVED: "approved_at",
    OrderStatus.REJECTED: "rejected_at",
}


def _to_domain(obj: OrderModel) -> Order:
    return Order(
        id=str(obj.id),
        product_id=str(obj.product_id),
        buyer_email=obj.buyer_email,
        order_quantity=obj.order_quantity,
        total_price=obj.total_price,
        payment_option=PaymentOption(obj.payment_option),
        payment_status=PaymentStatus(obj.payment_status),
        order_to=obj.order_to,
        created_at=obj.created_at,
        order_status=OrderStatus(obj.order_status),
        transaction_id=obj.transaction_id,
        approved_at=obj.approved_at,
        rejected_at=obj.rejected_at,
    )


class OrderRepository(OrderStorePort):
    """Repository that persists Order domain objects using Django ORM."""

    def create(self, order: Order) -> str:
        """Persist a new order record and return its UUID as a string."""
        obj = OrderModel.objects.create(
            product_id=parse_id(order.product_id),
            buyer_email=order.buyer_email,
            order_quantity=order.order_quantity,
            total_price=order.total_price,
            payment_option=order.payment_option.value,
            payment_status=order.payment_status.value,
            transaction_id=order.transaction_id,
            order_status=order.order_status.value,
            order_to=order.order_to,
            created_at=order.created_at,
        )
        return str(obj.id)

    def get(self, order_id: str) -> Optional[Order]:
        obj = OrderModel.objects.filter(id=parse_id(order_id)).first()
        return _to_domain(obj) if obj else None

    def list_pending_for_manager(self, manager: str) -> List[Order]:
        qs = OrderModel.objects.filter(
            order_to=manager, order_status=OrderModel.Status.PENDING
        ).order_by("-created_at")
        return [_to_domain(o) for o in qs]

    def transition(self, order_id: str, source: OrderStatus, target: OrderStatus, at: datetime) -> bool:
        """Single guarded ``UPDATE ... WHERE id = ? AND order_status = ?``."""
        updated = OrderModel.objects.filter(id=parse_id(order_id), order_status=source.value).update(
            order_status=target.value, **{_STAMP_FIELDS[target]: at}
        )
        return updated == 1

    def get_status(self, order_id: str) -> Optional[OrderStatus]:
        status = (
            OrderModel.objects.filter(id=parse_id(order_id))
            .values_list("order_status", flat=True)
            .first()
        )
        return OrderStatus(status) if status else None
