from django.urls import path

from .views import UserDetailView, UserRoleView, UsersCollectionView

app_name = "accounts"

urlpatterns = [
    path("users", UsersCollectionView.as_view(), name="users-collection"),
    path("users/role/<str:email>", UserRoleView.as_view(), name="users-role"),
    path("users/<str:email>", UserDetailView.as_view(), name="users-detail"),
]
