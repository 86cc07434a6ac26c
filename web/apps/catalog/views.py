"""HTTP views for the catalog app.

Plain single-document CRUD over ``Product``. Requests are validated with
pydantic schemas and errors propagate to the gateway exception handler.
"""

import logging

from django.core.paginator import Paginator
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common import errors
from apps.common.identifiers import parse_id
from apps.common.validation import validate_body

from .models import Product
from .schemas import CreateProductDTO, ProductReadDTO, ShowOnHomeDTO

logger = logging.getLogger("catalog")


def _dump(obj) -> dict:
    return ProductReadDTO.from_model(obj).model_dump(mode="json", by_alias=True)


class ProductsCollectionView(APIView):
    def post(self, request):
        """Create a product with status ``active``.

        Returns:
            Response: 200 with {success, productId}; 400 when title or
            productOwner is missing.
        """
        dto = validate_body(CreateProductDTO, request.data, "missing required fields")
        obj = Product.objects.create(
            title=dto.title,
            description=dto.description,
            price=dto.price,
            quantity=dto.quantity,
            moq=dto.moq,
            owner=dto.product_owner,
            show_on_home=dto.show_on_home,
        )
        logger.info("product created", extra={"product_id": str(obj.id), "owner": obj.owner})
        return Response({"success": True, "productId": str(obj.id)})


class AdminProductsView(APIView):
    def get(self, request):
        """List products, optionally filtered by ``owner``, paginated."""
        owner = request.GET.get("owner")
        try:
            page = max(int(request.GET.get("page", 1)), 1)
            limit = max(int(request.GET.get("limit", 10)), 1)
        except ValueError:
            raise errors.ValidationError("invalid pagination parameters") from None

        qs = Product.objects.order_by("-created_at")
        if owner:
            qs = qs.filter(owner=owner)

        p = Paginator(qs, limit)
        products = [_dump(o) for o in p.get_page(page).object_list] if page <= p.num_pages else []
        return Response(
            {
                "total": p.count,
                "page": page,
                "limit": limit,
                "totalPages": p.num_pages if p.count else 0,
                "products": products,
            }
        )


class ProductDetailView(APIView):
    def get(self, request, pid: str):
        obj = Product.objects.filter(id=parse_id(pid)).first()
        if obj is None:
            raise errors.NotFoundError("product not found")
        return Response(_dump(obj))

    def delete(self, request, pid: str):
        deleted, _ = Product.objects.filter(id=parse_id(pid)).delete()
        if deleted:
            logger.info("product deleted", extra={"product_id": pid})
        return Response({"success": bool(deleted), "deletedCount": deleted})


class ShowOnHomeView(APIView):
    def patch(self, request, pid: str):
        product_id = parse_id(pid)
        dto = validate_body(ShowOnHomeDTO, request.data, "missing required fields")
        updated = Product.objects.filter(id=product_id).update(show_on_home=dto.show_on_home)
        if not updated:
            raise errors.NotFoundError("product not found")
        return Response({"success": True, "modifiedCount": updated})
