"""Domain models, ports and lifecycle service for orders.

This module contains the dataclasses used as DTOs for orders, protocol
definitions (ports) for the stores the lifecycle depends on, and the
``OrderLifecycleManager`` that validates new orders against catalog stock and
drives the ``pending -> approved | rejected`` state machine. It performs no
I/O itself; concrete stores are injected by ``providers``.
"""

import logging
from contextlib import nullcontext
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Callable, ContextManager, List, Optional, Protocol

from apps.common import errors

logger = logging.getLogger("orders")

NOT_FOUND_OR_PROCESSED = "order not found or already processed"


# ---- Enums ----
class OrderStatus(str, Enum):
    """Order lifecycle states.

    ``PENDING`` is initial; ``APPROVED`` and ``REJECTED`` are terminal.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PaymentOption(str, Enum):
    CASH_ON_DELIVERY = "CashOnDelivery"
    PREPAID = "Prepaid"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


TERMINAL_STATUSES = frozenset({OrderStatus.APPROVED, OrderStatus.REJECTED})


# ---- Entities / DTOs ----
@dataclass(frozen=True)
class ProductSnapshot:
    """The slice of a catalog product the order lifecycle reads.

    Attributes:
        id: Product identifier.
        quantity: Available stock at read time.
        moq: Minimum order quantity.
        owner: Manager identity that owns the product and approves its orders.
        status: Catalog status (e.g. ``active``).
    """

    id: str
    quantity: int
    moq: int
    owner: str
    status: str = "active"


@dataclass
class CreateOrderCommand:
    """Validated shape of an order submission.

    Required fields are optional here so that presence is checked by the
    lifecycle manager, in order, before any store access.
    """

    product_id: Optional[str] = None
    buyer_email: Optional[str] = None
    order_quantity: Optional[int] = None
    total_price: Optional[Decimal] = None
    payment_option: PaymentOption = PaymentOption.PREPAID
    transaction_id: Optional[str] = None


@dataclass
class Order:
    """Container for order data.

    Attributes:
        id: Persistent identifier, or None before the order is stored.
        product_id: Referenced product (no ownership).
        buyer_email: Buyer identity.
        order_quantity: Units ordered.
        total_price: Order total in major currency units.
        payment_option: How the buyer pays.
        payment_status: ``pending`` for cash on delivery, ``paid`` otherwise.
        order_to: Manager identity responsible for approval.
        created_at: Creation time (UTC).
        order_status: Current lifecycle state.
        transaction_id: Optional weak reference to a payment record.
        approved_at / rejected_at: Set once, on the terminal transition.
    """

    id: Optional[str]
    product_id: str
    buyer_email: str
    order_quantity: int
    total_price: Decimal
    payment_option: PaymentOption
    payment_status: PaymentStatus
    order_to: str
    created_at: datetime
    order_status: OrderStatus = OrderStatus.PENDING
    transaction_id: Optional[str] = None
    approved_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None

    @property
    def is_terminal(self) -> bool:
        return self.order_status in TERMINAL_STATUSES


# ---- Ports (DIP) ----
class CatalogPort(Protocol):
    """Port describing the catalog operations used by the lifecycle."""

    def find_by_id(self, product_id: str) -> Optional[ProductSnapshot]:
        """Return the product snapshot, or None when it does not exist."""
        raise NotImplementedError()

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        """Atomically decrement stock when at least ``quantity`` is available.

        Returns:
            True when the stock was decremented, False when the product is
            missing or has fewer than ``quantity`` units left (no change).
        """
        raise NotImplementedError()


class OrderStorePort(Protocol):
    """Port describing order persistence. The lifecycle owns all writes."""

    def create(self, order: Order) -> str:
        """Persist a new order and return its identifier."""
        raise NotImplementedError()

    def get(self, order_id: str) -> Optional[Order]:
        raise NotImplementedError()

    def list_pending_for_manager(self, manager: str) -> List[Order]:
        """Pending orders addressed to ``manager``, newest first."""
        raise NotImplementedError()

    def transition(self, order_id: str, source: OrderStatus, target: OrderStatus, at: datetime) -> bool:
        """Move an order from ``source`` to ``target`` in one guarded update.

        Only a document whose current status equals ``source`` is touched.
        The matching timestamp (``approved_at``/``rejected_at``) is set to
        ``at``.

        Returns:
            True when exactly one order was updated.
        """
        raise NotImplementedError()

    def get_status(self, order_id: str) -> Optional[OrderStatus]:
        raise NotImplementedError()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---- Domain service ----
class OrderLifecycleManager:
    """Domain service that creates orders and drives their approval workflow.

    Order placement runs in one of two modes:

    - atomic (default): inside ``transaction()``, the stock is decremented
      with a conditional update (``quantity >= order_quantity``) and only then
      the order is inserted. Concurrent buyers cannot oversell, and a failed
      insert rolls the decrement back.
    - sequential: the order is inserted first and the stock decremented
      afterwards. A failed decrement leaves an order without a matching stock
      change and is raised as ``FatalInconsistencyError``; nothing is rolled
      back.
    """

    def __init__(
        self,
        catalog: CatalogPort,
        orders: OrderStorePort,
        atomic: bool = True,
        transaction: Optional[Callable[[], ContextManager]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize the service with its collaborators.

        Args:
            catalog: CatalogPort used to read products and decrement stock.
            orders: OrderStorePort used to persist and transition orders.
            atomic: Selects atomic or sequential order placement.
            transaction: Factory of a context manager spanning one unit of
                work (e.g. ``django.db.transaction.atomic``).
            clock: Returns the current aware datetime.
        """
        self.catalog = catalog
        self.orders = orders
        self.atomic = atomic
        self.transaction = transaction or nullcontext
        self.clock = clock or _utcnow

    # -- creation --

    def create_order(self, cmd: CreateOrderCommand) -> str:
        """Validate a submission against the product and persist the order.

        Checks run in order and stop at the first failure: required fields,
        product existence, minimum order quantity, available stock.

        Args:
            cmd: The order submission.

        Returns:
            str: Identifier of the new order.

        Raises:
            ValidationError: Missing fields, quantity below the product's
                moq, or quantity above available stock.
            NotFoundError: The product does not exist.
            FatalInconsistencyError: Sequential mode only, when the order was
                stored but the stock could not be decremented.
        """
        if (
            not cmd.product_id
            or not cmd.buyer_email
            or cmd.order_quantity is None
            or cmd.total_price is None
        ):
            raise errors.ValidationError("missing required fields")

        product = self.catalog.find_by_id(cmd.product_id)
        if product is None:
            raise errors.NotFoundError("product not found")

        if cmd.order_quantity < product.moq:
            raise errors.ValidationError(f"below minimum order quantity: minimum is {product.moq}")
        if cmd.order_quantity > product.quantity:
            raise errors.ValidationError("exceeds available stock")

        payment_option = cmd.payment_option or PaymentOption.PREPAID
        order = Order(
            id=None,
            product_id=product.id,
            buyer_email=cmd.buyer_email,
            order_quantity=cmd.order_quantity,
            total_price=cmd.total_price,
            payment_option=payment_option,
            payment_status=(
                PaymentStatus.PENDING
                if payment_option == PaymentOption.CASH_ON_DELIVERY
                else PaymentStatus.PAID
            ),
            order_to=product.owner,
            created_at=self.clock(),
            transaction_id=cmd.transaction_id,
        )

        if self.atomic:
            order_id = self._place_atomically(order)
        else:
            order_id = self._place_sequentially(order)

        logger.info(
            "order created",
            extra={
                "order_id": order_id,
                "product_id": order.product_id,
                "order_quantity": order.order_quantity,
                "payment_status": order.payment_status.value,
            },
        )
        return order_id

    def _place_atomically(self, order: Order) -> str:
        with self.transaction():
            if not self.catalog.decrement_stock(order.product_id, order.order_quantity):
                # stock moved between the snapshot read and the decrement
                raise errors.ValidationError("exceeds available stock")
            order.id = self.orders.create(order)
        return order.id

    def _place_sequentially(self, order: Order) -> str:
        order.id = self.orders.create(order)
        try:
            decremented = self.catalog.decrement_stock(order.product_id, order.order_quantity)
        except Exception as exc:
            raise errors.FatalInconsistencyError(
                order_id=order.id, product_id=order.product_id, order_quantity=order.order_quantity
            ) from exc
        if not decremented:
            raise errors.FatalInconsistencyError(
                order_id=order.id, product_id=order.product_id, order_quantity=order.order_quantity
            )
        return order.id

    # -- queries --

    def get_order(self, order_id: str) -> Order:
        order = self.orders.get(order_id)
        if order is None:
            raise errors.NotFoundError("order not found")
        return order

    def list_pending_for_manager(self, manager: str) -> List[Order]:
        """Pending orders addressed to ``manager``, most recent first."""
        return self.orders.list_pending_for_manager(manager)

    # -- transitions --

    def approve(self, order_id: str) -> None:
        """Transition ``pending -> approved``.

        Raises:
            NotFoundError: No such order, or it was already rejected.
            ConflictError: The order is already approved.
        """
        if self.orders.transition(order_id, OrderStatus.PENDING, OrderStatus.APPROVED, self.clock()):
            logger.info("order approved", extra={"order_id": str(order_id)})
            return

        current = self.orders.get_status(order_id)
        if current == OrderStatus.APPROVED:
            raise errors.ConflictError("order already approved")
        raise errors.NotFoundError(NOT_FOUND_OR_PROCESSED)

    def reject(self, order_id: str) -> None:
        """Transition ``pending -> rejected``.

        Raises:
            NotFoundError: No such order, or it already left ``pending``.
            ConflictError: The order is still pending but the update did not
                apply.
        """
        if self.orders.transition(order_id, OrderStatus.PENDING, OrderStatus.REJECTED, self.clock()):
            logger.info("order rejected", extra={"order_id": str(order_id)})
            return

        current = self.orders.get_status(order_id)
        if current == OrderStatus.PENDING:
            raise errors.ConflictError("order rejection failed", status_code=400)
        raise errors.NotFoundError(NOT_FOUND_OR_PROCESSED)
