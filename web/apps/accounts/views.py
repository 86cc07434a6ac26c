"""HTTP views for the accounts app: single-document CRUD over ``Account``."""

import logging

from django.db import IntegrityError, transaction
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common import errors
from apps.common.validation import validate_body

from .models import Account
from .schemas import CreateUserDTO, UpdateRoleDTO, UserReadDTO

logger = logging.getLogger("accounts")


def _dump(obj) -> dict:
    return UserReadDTO.from_model(obj).model_dump(mode="json", by_alias=True)


class UsersCollectionView(APIView):
    def get(self, request):
        return Response([_dump(u) for u in Account.objects.order_by("-created_at")])

    def post(self, request):
        """Register a user; 409 when the email is already taken."""
        dto = validate_body(CreateUserDTO, request.data, "missing required fields")
        if Account.objects.filter(email=dto.email).exists():
            raise errors.ConflictError("User already exists")
        try:
            with transaction.atomic():
                obj = Account.objects.create(email=dto.email, name=dto.name, photo_url=dto.photo_url)
        except IntegrityError:
            raise errors.ConflictError("User already exists") from None
        logger.info("user registered", extra={"user_id": str(obj.id)})
        return Response({"success": True, "userId": str(obj.id)})


class UserDetailView(APIView):
    def get(self, request, email: str):
        obj = Account.objects.filter(email=email.strip().lower()).first()
        if obj is None:
            raise errors.NotFoundError("user not found")
        return Response(_dump(obj))


class UserRoleView(APIView):
    def patch(self, request, email: str):
        """Change a user's role (buyer, manager or admin)."""
        dto = validate_body(UpdateRoleDTO, request.data, "invalid role")
        updated = Account.objects.filter(email=email.strip().lower()).update(role=dto.role)
        if not updated:
            raise errors.NotFoundError("user not found")
        logger.info("user role changed", extra={"email": email, "role": dto.role})
        return Response({"success": True, "modifiedCount": updated})
