from django.urls import include, path

urlpatterns = [
    path("", include("apps.monitoring.urls")),
    path("", include("apps.accounts.urls")),
    path("", include("apps.catalog.urls")),
    path("", include("apps.orders.urls")),
    path("", include("apps.payments.urls")),
]
