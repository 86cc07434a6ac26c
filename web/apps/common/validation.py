from typing import Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from . import errors

M = TypeVar("M", bound=BaseModel)


def validate_body(schema: Type[M], data, message: str) -> M:
    """Validate a request body against a pydantic schema.

    Schema failures are reported with the operation's stable ``message``
    instead of pydantic's field-level detail.
    """
    try:
        return schema.model_validate(data)
    except SchemaError:
        raise errors.ValidationError(message) from None
