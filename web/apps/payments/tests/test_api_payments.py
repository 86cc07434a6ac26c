"""API tests for recording payments and creating payment intents."""
import uuid

import pytest

from apps.common import errors
from apps.payments.adapters import IntentGatewayStub
from apps.payments.models import PaymentModel
from apps.payments.repository import PaymentRepository

PAYMENTS_URL = "/payments"
INTENT_URL = "/create-payment-intent"


def payment_body(**overrides):
    body = {
        "productId": str(uuid.uuid4()),
        "buyerEmail": "buyer@example.com",
        "amount": 50,
        "transactionId": "T1",
    }
    body.update(overrides)
    return body


@pytest.mark.django_db
def test_record_payment_with_defaults(client):
    r = client.post(PAYMENTS_URL, data=payment_body(), content_type="application/json")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    row = PaymentModel.objects.get(id=body["paymentId"])
    assert row.currency == "BDT"
    assert row.payment_method == "card"
    assert row.payment_status == "succeeded"


@pytest.mark.django_db
def test_duplicate_transaction_is_conflict(client):
    assert client.post(PAYMENTS_URL, data=payment_body(), content_type="application/json").status_code == 200
    r = client.post(PAYMENTS_URL, data=payment_body(amount=70), content_type="application/json")
    assert r.status_code == 409
    assert r.json() == {"success": False, "message": "payment already recorded"}
    assert PaymentModel.objects.filter(transaction_id="T1").count() == 1


@pytest.mark.django_db
def test_record_payment_missing_fields(client):
    body = payment_body()
    del body["transactionId"]
    r = client.post(PAYMENTS_URL, data=body, content_type="application/json")
    assert r.status_code == 400
    assert r.json()["message"] == "missing payment fields"
    assert PaymentModel.objects.count() == 0


def test_create_intent_with_stub(client):
    r = client.post(INTENT_URL, data={"amount": 50, "productId": "P1"}, content_type="application/json")
    assert r.status_code == 200
    assert "_secret_" in r.json()["clientSecret"]


@pytest.mark.parametrize("body", [{"amount": 50}, {"productId": "P1"}, {}])
def test_create_intent_missing_info(client, body):
    r = client.post(INTENT_URL, data=body, content_type="application/json")
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "missing payment info"}


def test_create_intent_gateway_failure(client, monkeypatch):
    def failing(self, amount_minor, currency, product_id, idempotency_key=None):
        raise errors.GatewayError()

    monkeypatch.setattr(IntentGatewayStub, "create_intent", failing)
    r = client.post(INTENT_URL, data={"amount": 50, "productId": "P1"}, content_type="application/json")
    assert r.status_code == 500
    assert r.json() == {"success": False, "message": "payment gateway error"}


def test_create_intent_forwards_idempotency_key(client, settings, monkeypatch):
    settings.PAYMENT_INTENT_CURRENCY = "usd"
    seen = {}

    def recording(self, amount_minor, currency, product_id, idempotency_key=None):
        seen.update(amount=amount_minor, currency=currency, product=product_id, key=idempotency_key)
        return "pi_x_secret_y"

    monkeypatch.setattr(IntentGatewayStub, "create_intent", recording)
    r = client.post(
        INTENT_URL,
        data={"amount": "12.50", "productId": "P9"},
        content_type="application/json",
        HTTP_IDEMPOTENCY_KEY="retry-1",
    )
    assert r.status_code == 200
    assert r.json() == {"clientSecret": "pi_x_secret_y"}
    assert seen == {"amount": 1250, "currency": "usd", "product": "P9", "key": "retry-1"}


@pytest.mark.django_db
@pytest.mark.parametrize("amount", ["12345678901234.5", "50.999"])
def test_record_payment_rejects_amounts_beyond_column_precision(client, amount):
    r = client.post(PAYMENTS_URL, data=payment_body(amount=amount), content_type="application/json")
    assert r.status_code == 400
    assert r.json()["success"] is False
    assert PaymentModel.objects.count() == 0


@pytest.mark.django_db
def test_record_payment_rejects_malformed_product_id_before_reading_the_store(client, monkeypatch):
    def no_store_access(self, transaction_id):
        raise AssertionError("store must not be queried")

    monkeypatch.setattr(PaymentRepository, "exists", no_store_access)
    r = client.post(PAYMENTS_URL, data=payment_body(productId="P1"), content_type="application/json")
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "invalid id format"}
    assert PaymentModel.objects.count() == 0
