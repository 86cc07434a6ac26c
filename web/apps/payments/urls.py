from django.urls import path

from .views import PaymentIntentView, PaymentsCollectionView

app_name = "payments"

urlpatterns = [
    path("create-payment-intent", PaymentIntentView.as_view(), name="payment-intent"),
    path("payments", PaymentsCollectionView.as_view(), name="payments-collection"),
]
