from django.urls import path

from .views import (
    ApproveOrderView,
    OrdersCollectionView,
    OrdersPingView,
    PendingOrdersView,
    RejectOrderView,
    RetrieveOrderView,
)

app_name = "orders"

urlpatterns = [
    path("orders", OrdersCollectionView.as_view(), name="orders-collection"),
    path("orders/ping", OrdersPingView.as_view(), name="ping"),
    path("orders/pending/<str:email>", PendingOrdersView.as_view(), name="orders-pending"),
    path("orders/approve/<str:oid>", ApproveOrderView.as_view(), name="orders-approve"),
    path("orders/reject/<str:oid>", RejectOrderView.as_view(), name="orders-reject"),
    path("orders/<str:oid>", RetrieveOrderView.as_view(), name="orders-detail"),
]
