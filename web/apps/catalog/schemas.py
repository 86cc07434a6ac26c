"""Pydantic schemas for catalog products."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CreateProductDTO(BaseModel):
    """Schema for creating a product.

    Attributes:
        title: Display title (required).
        product_owner: Manager email that owns the product (required).
        price: Unit price in major currency units.
        quantity: Initial stock.
        moq: Minimum order quantity (at least 1).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(min_length=1, max_length=200)
    product_owner: str = Field(min_length=3, max_length=254)
    description: str = ""
    price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    quantity: int = Field(default=0, ge=0)
    moq: int = Field(default=1, ge=1)
    show_on_home: bool = False

    @field_validator("product_owner")
    @classmethod
    def normalize_owner(cls, v: str) -> str:
        """Owners are account emails, stored lowercased like accounts."""
        return v.strip().lower()


class ShowOnHomeDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    show_on_home: bool


class ProductReadDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    description: str
    price: float
    quantity: int
    moq: int
    product_owner: str
    status: str
    show_on_home: bool
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, obj) -> "ProductReadDTO":
        return cls(
            id=str(obj.id),
            title=obj.title,
            description=obj.description,
            price=float(obj.price),
            quantity=obj.quantity,
            moq=obj.moq,
            product_owner=obj.owner,
            status=obj.status,
            show_on_home=obj.show_on_home,
            created_at=obj.created_at,
        )
