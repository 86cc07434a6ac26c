"""HTTP views for the orders app.

Views are kept intentionally small: they validate requests (via pydantic),
map them to domain commands, delegate to the ``OrderLifecycleManager`` and
return an HTTP response. Domain errors are not caught here; the gateway
exception handler maps them to status codes and ``{success, message}``
bodies.

The views obtain a configured service from ``providers.get_order_service()``
so tests can swap in a service wired with other ports.
"""

from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from apps.common.validation import validate_body

from . import providers
from .schemas import CreateOrderDTO, OrderReadDTO


class OrdersPingView(APIView):
    """Liveness endpoint for the orders module."""

    def get(self, request):
        return Response({"ok": True})


class OrdersCollectionView(APIView):
    """Create an order against a product's stock."""

    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "orders_create"

    def post(self, request):
        """Create a new order.

        Returns:
            Response: One of the following responses.
            - 200 with {success: true, orderId} when the order is created.
            - 400 when fields are missing/malformed, the quantity is below
              the product's moq or above available stock.
            - 404 when the product does not exist.
            - 500 when the order was stored but the stock update failed.
        """
        dto = validate_body(CreateOrderDTO, request.data, "invalid order payload")
        order_id = providers.get_order_service().create_order(dto.to_command())
        return Response({"success": True, "orderId": order_id})


class PendingOrdersView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "orders_read"

    def get(self, request, email: str):
        """Pending orders addressed to the manager ``email``, newest first."""
        orders = providers.get_order_service().list_pending_for_manager(email.strip().lower())
        return Response([OrderReadDTO.from_domain(o).to_json() for o in orders])


class RetrieveOrderView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "orders_read"

    def get(self, request, oid: str):
        order = providers.get_order_service().get_order(oid)
        return Response(OrderReadDTO.from_domain(order).to_json())


class ApproveOrderView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "orders_transition"

    def patch(self, request, oid: str):
        """Approve a pending order (404 unknown/processed, 409 already approved)."""
        providers.get_order_service().approve(oid)
        return Response({"success": True, "message": "order approved"})


class RejectOrderView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "orders_transition"

    def patch(self, request, oid: str):
        """Reject a pending order (404 unknown/processed)."""
        providers.get_order_service().reject(oid)
        return Response({"success": True, "message": "order rejected"})
