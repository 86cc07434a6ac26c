"""HTTP views for the payments app.

``PaymentIntentView`` forwards an optional ``Idempotency-Key`` header to the
processor so client retries do not create duplicate intents. Domain errors
propagate to the gateway exception handler.
"""

from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from apps.common.validation import validate_body

from . import providers
from .schemas import CreatePaymentIntentDTO, RecordPaymentDTO


class PaymentIntentView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "payments"

    def post(self, request):
        """Create a payment intent.

        Returns:
            Response: 200 with {clientSecret}; 400 when amount or productId
            is missing; 500 when the processor fails.
        """
        dto = validate_body(CreatePaymentIntentDTO, request.data, "missing payment info")
        secret = providers.get_intent_service().create_intent(
            dto.amount,
            dto.product_id,
            idempotency_key=request.headers.get("Idempotency-Key"),
        )
        return Response({"clientSecret": secret})


class PaymentsCollectionView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "payments"

    def post(self, request):
        """Record a payment confirmation.

        Returns:
            Response: 200 with {success: true, paymentId}; 400 when fields
            are missing; 409 when the transaction was already recorded.
        """
        dto = validate_body(RecordPaymentDTO, request.data, "missing payment fields")
        payment_id = providers.get_payment_recorder().record_payment(dto.to_command())
        return Response({"success": True, "paymentId": payment_id})
