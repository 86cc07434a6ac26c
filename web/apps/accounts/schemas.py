from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

ROLES = {"buyer", "manager", "admin"}


class CreateUserDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: str = Field(min_length=3, max_length=254)
    name: str = ""
    photo_url: str = ""

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UpdateRoleDTO(BaseModel):
    role: str

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        """Accept one of ``buyer``, ``manager``, ``admin`` (case-insensitive)."""
        v2 = v.strip().lower()
        if v2 not in ROLES:
            raise ValueError("Unsupported role")
        return v2


class UserReadDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    email: str
    name: str
    photo_url: str
    role: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, obj) -> "UserReadDTO":
        return cls(
            id=str(obj.id),
            email=obj.email,
            name=obj.name,
            photo_url=obj.photo_url,
            role=obj.role,
            created_at=obj.created_at,
        )
