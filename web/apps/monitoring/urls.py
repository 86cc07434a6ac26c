from django.urls import path

from .api import health_view, root_view

urlpatterns = [
    path("", root_view, name="root"),
    path("health", health_view, name="health"),
]
