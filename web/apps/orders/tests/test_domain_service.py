"""Unit tests for the OrderLifecycleManager domain service.

These tests drive order creation and the approve/reject state machine
through in-memory ports, covering the happy path, each validation failure,
both placement modes and every transition out of a terminal state.
"""

from contextlib import contextmanager
from decimal import Decimal

import pytest

from apps.common import errors
from apps.orders.domain import (
    CreateOrderCommand,
    OrderLifecycleManager,
    OrderStatus,
    PaymentOption,
    PaymentStatus,
    ProductSnapshot,
)

from .fakes import InMemoryCatalog, InMemoryOrders, TickingClock

MANAGER = "manager@example.com"


def make_service(quantity=10, moq=2, atomic=True, catalog=None, orders=None, transaction=None):
    catalog = catalog or InMemoryCatalog(ProductSnapshot(id="P1", quantity=quantity, moq=moq, owner=MANAGER))
    orders = orders or InMemoryOrders()
    service = OrderLifecycleManager(catalog, orders, atomic=atomic, transaction=transaction, clock=TickingClock())
    return service, catalog, orders


def cmd(**overrides):
    base = dict(
        product_id="P1",
        buyer_email="buyer@example.com",
        order_quantity=3,
        total_price=Decimal("30"),
        payment_option=PaymentOption.CASH_ON_DELIVERY,
    )
    base.update(overrides)
    return CreateOrderCommand(**base)


def test_cash_on_delivery_order_is_pending_and_decrements_stock():
    """Scenario: stock 10, moq 2, order 3 COD -> stock 7, pending/pending."""
    service, catalog, orders = make_service()
    oid = service.create_order(cmd())
    assert catalog.quantity("P1") == 7
    order = orders.get(oid)
    assert order.order_status == OrderStatus.PENDING
    assert order.payment_status == PaymentStatus.PENDING
    assert order.order_to == MANAGER
    assert order.approved_at is None and order.rejected_at is None


def test_prepaid_order_is_marked_paid_and_keeps_transaction_id():
    service, _, orders = make_service()
    oid = service.create_order(cmd(payment_option=PaymentOption.PREPAID, transaction_id="pi_123"))
    order = orders.get(oid)
    assert order.payment_status == PaymentStatus.PAID
    assert order.transaction_id == "pi_123"


@pytest.mark.parametrize("qty", [2, 5, 10])
def test_valid_quantities_decrement_stock_exactly(qty):
    service, catalog, _ = make_service()
    service.create_order(cmd(order_quantity=qty))
    assert catalog.quantity("P1") == 10 - qty


@pytest.mark.parametrize("atomic", [True, False])
def test_below_moq_mentions_moq_and_leaves_stock(atomic):
    service, catalog, orders = make_service(atomic=atomic)
    with pytest.raises(errors.ValidationError) as e:
        service.create_order(cmd(order_quantity=1))
    assert "2" in e.value.message
    assert catalog.quantity("P1") == 10
    assert orders.rows == {}


def test_exceeding_stock_is_rejected_without_side_effects():
    service, catalog, orders = make_service()
    with pytest.raises(errors.ValidationError) as e:
        service.create_order(cmd(order_quantity=11))
    assert e.value.message == "exceeds available stock"
    assert catalog.quantity("P1") == 10
    assert orders.rows == {}


@pytest.mark.parametrize(
    "missing",
    [
        {"product_id": None},
        {"buyer_email": ""},
        {"order_quantity": None},
        {"total_price": None},
    ],
)
def test_missing_required_fields(missing):
    service, _, _ = make_service()
    with pytest.raises(errors.ValidationError) as e:
        service.create_order(cmd(**missing))
    assert e.value.message == "missing required fields"


def test_missing_fields_are_checked_before_the_product_lookup():
    service, _, _ = make_service()
    with pytest.raises(errors.ValidationError):
        service.create_order(cmd(product_id="UNKNOWN", order_quantity=None))


def test_unknown_product_is_not_found():
    service, _, _ = make_service()
    with pytest.raises(errors.NotFoundError) as e:
        service.create_order(cmd(product_id="P404"))
    assert e.value.message == "product not found"


class RacingCatalog(InMemoryCatalog):
    """Snapshot says there is stock; the conditional decrement disagrees."""

    def decrement_stock(self, product_id, quantity):
        return False


def test_atomic_placement_rejects_when_stock_moved_after_the_read():
    catalog = RacingCatalog(ProductSnapshot(id="P1", quantity=10, moq=1, owner=MANAGER))
    service, _, orders = make_service(catalog=catalog)
    with pytest.raises(errors.ValidationError) as e:
        service.create_order(cmd())
    assert e.value.message == "exceeds available stock"
    assert orders.rows == {}


def test_atomic_placement_runs_decrement_and_insert_in_one_transaction():
    seen = []

    @contextmanager
    def tracking_transaction():
        seen.append("begin")
        try:
            yield
        except Exception:
            seen.append("rollback")
            raise
        seen.append("commit")

    service, _, _ = make_service(transaction=tracking_transaction)
    service.create_order(cmd())
    assert seen == ["begin", "commit"]

    seen.clear()
    racing = RacingCatalog(ProductSnapshot(id="P1", quantity=10, moq=1, owner=MANAGER))
    service, _, _ = make_service(catalog=racing, transaction=tracking_transaction)
    with pytest.raises(errors.ValidationError):
        service.create_order(cmd())
    assert seen == ["begin", "rollback"]


def test_sequential_placement_surfaces_failed_decrement_as_fatal():
    catalog = RacingCatalog(ProductSnapshot(id="P1", quantity=10, moq=1, owner=MANAGER))
    service, _, orders = make_service(catalog=catalog, atomic=False)
    with pytest.raises(errors.FatalInconsistencyError) as e:
        service.create_order(cmd())
    # the order stays persisted; nothing is compensated
    assert list(orders.rows) == ["O1"]
    assert e.value.context["order_id"] == "O1"
    assert e.value.status_code == 500


def test_sequential_placement_wraps_store_errors_from_the_decrement():
    class BrokenCatalog(InMemoryCatalog):
        def decrement_stock(self, product_id, quantity):
            raise RuntimeError("connection reset")

    catalog = BrokenCatalog(ProductSnapshot(id="P1", quantity=10, moq=1, owner=MANAGER))
    service, _, _ = make_service(catalog=catalog, atomic=False)
    with pytest.raises(errors.FatalInconsistencyError) as e:
        service.create_order(cmd())
    assert isinstance(e.value.__cause__, RuntimeError)


# ---- state machine ----

def test_approve_unknown_order_is_not_found():
    service, _, _ = make_service()
    with pytest.raises(errors.NotFoundError) as e:
        service.approve("O404")
    assert e.value.message == "order not found or already processed"


def test_approve_twice_conflicts_and_keeps_status():
    service, _, orders = make_service()
    oid = service.create_order(cmd())
    service.approve(oid)
    approved_at = orders.get(oid).approved_at
    assert orders.get(oid).order_status == OrderStatus.APPROVED
    assert approved_at is not None

    with pytest.raises(errors.ConflictError) as e:
        service.approve(oid)
    assert e.value.message == "order already approved"
    assert orders.get(oid).approved_at == approved_at


@pytest.mark.parametrize(
    "first, second, expected",
    [
        ("approve", "reject", errors.NotFoundError),
        ("reject", "approve", errors.NotFoundError),
        ("reject", "reject", errors.NotFoundError),
        ("approve", "approve", errors.ConflictError),
    ],
)
def test_terminal_states_never_change(first, second, expected):
    service, _, orders = make_service()
    oid = service.create_order(cmd())
    getattr(service, first)(oid)
    status = orders.get(oid).order_status
    with pytest.raises(expected):
        getattr(service, second)(oid)
    assert orders.get(oid).order_status == status


def test_reject_sets_rejected_at():
    service, _, orders = make_service()
    oid = service.create_order(cmd())
    service.reject(oid)
    order = orders.get(oid)
    assert order.order_status == OrderStatus.REJECTED
    assert order.rejected_at is not None and order.approved_at is None


def test_reject_reports_failure_when_a_pending_order_was_not_updated():
    class StuckOrders(InMemoryOrders):
        def transition(self, order_id, source, target, at):
            return False

    service, _, orders = make_service(orders=StuckOrders())
    oid = service.create_order(cmd())
    with pytest.raises(errors.ConflictError) as e:
        service.reject(oid)
    assert e.value.message == "order rejection failed"
    assert e.value.status_code == 400


def test_list_pending_filters_by_manager_and_status_newest_first():
    other = ProductSnapshot(id="P2", quantity=10, moq=1, owner="other@example.com")
    catalog = InMemoryCatalog(ProductSnapshot(id="P1", quantity=50, moq=1, owner=MANAGER), other)
    service, _, _ = make_service(catalog=catalog)

    first = service.create_order(cmd(order_quantity=1))
    approved = service.create_order(cmd(order_quantity=1))
    service.create_order(cmd(product_id="P2", order_quantity=1))
    latest = service.create_order(cmd(order_quantity=1))
    service.approve(approved)

    pending = service.list_pending_for_manager(MANAGER)
    assert [o.id for o in pending] == [latest, first]
    assert all(o.order_status == OrderStatus.PENDING and o.order_to == MANAGER for o in pending)


def test_get_order_unknown_is_not_found():
    service, _, _ = make_service()
    with pytest.raises(errors.NotFoundError):
        service.get_order("O404")
