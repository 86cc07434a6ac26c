from django.urls import path

from .views import AdminProductsView, ProductDetailView, ProductsCollectionView, ShowOnHomeView

app_name = "catalog"

urlpatterns = [
    path("products", ProductsCollectionView.as_view(), name="products-collection"),
    path("admin/products", AdminProductsView.as_view(), name="products-admin"),
    path("products/show-home/<str:pid>", ShowOnHomeView.as_view(), name="products-show-home"),
    path("products/<str:pid>", ProductDetailView.as_view(), name="products-detail"),
]
