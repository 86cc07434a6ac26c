"""Tests for the Django payment repository."""
import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from apps.common import errors
from apps.payments.domain import PaymentRecord, PaymentRecorder, RecordPaymentCommand
from apps.payments.models import PaymentModel
from apps.payments.repository import PaymentRepository


def record(transaction_id="T1", amount=Decimal("50")):
    return PaymentRecord(
        id=None,
        product_id=str(uuid.uuid4()),
        buyer_email="b@example.com",
        amount=amount,
        currency="BDT",
        transaction_id=transaction_id,
        payment_method="card",
        payment_status="succeeded",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.mark.django_db
def test_create_and_exists():
    repo = PaymentRepository()
    assert repo.exists("T1") is False
    pid = repo.create(record())
    assert repo.exists("T1") is True
    assert PaymentModel.objects.get(id=pid).amount == Decimal("50")


@pytest.mark.django_db
def test_unique_transaction_id_turns_a_racing_insert_into_a_conflict():
    """Both writers passed the existence check; the constraint decides."""
    repo = PaymentRepository()
    repo.create(record())
    with pytest.raises(errors.ConflictError) as e:
        repo.create(record(amount=Decimal("70")))
    assert e.value.message == "payment already recorded"
    assert PaymentModel.objects.count() == 1
    # the surrounding transaction is still usable after the rolled-back savepoint
    assert PaymentModel.objects.get(transaction_id="T1").amount == Decimal("50")


@pytest.mark.django_db
def test_recorder_surfaces_the_racing_conflict(monkeypatch):
    repo = PaymentRepository()
    repo.create(record())
    monkeypatch.setattr(PaymentRepository, "exists", lambda self, transaction_id: False)
    cmd = RecordPaymentCommand(
        product_id=str(uuid.uuid4()), buyer_email="b@example.com", amount=Decimal("50"), transaction_id="T1"
    )
    with pytest.raises(errors.ConflictError):
        PaymentRecorder(repo).record_payment(cmd)
    assert PaymentModel.objects.count() == 1
