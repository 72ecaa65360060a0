import secrets
from typing import Annotated

from pydantic import StringConstraints, TypeAdapter, ValidationError


UNKNOWN_VEHICLE_TYPE = "Unknown"

# Record identifiers are 12-byte values rendered as 24 hex characters
ObjectIdStr = Annotated[str, StringConstraints(pattern=r"^[0-9a-fA-F]{24}$")]

_object_id_adapter = TypeAdapter(ObjectIdStr)


def is_valid_object_id(value) -> bool:
    try:
        _object_id_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def new_object_id() -> str:
    return secrets.token_hex(12)
