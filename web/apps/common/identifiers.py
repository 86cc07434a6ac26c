import uuid

from . import errors


def parse_id(raw) -> uuid.UUID:
    """Resolve an opaque identifier (path param or body field) to a UUID key.

    Raises:
        ValidationError: ``invalid id format`` when ``raw`` is not a UUID.
    """
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except (TypeError, ValueError, AttributeError):
        raise errors.ValidationError("invalid id format") from None
