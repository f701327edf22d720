import json
from typing import Any, Optional, Union

from pydantic import TypeAdapter, ValidationError

from rtdb_admin.core.exceptions import SerializationError


def encode_json(value: Any) -> str:
    """Serialize ``value`` to compact JSON, rejecting NaN and unsupported types."""
    try:
        return json.dumps(value, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"value is not JSON-serializable: {e}") from e


def decode_json(raw: Union[bytes, str]) -> Any:
    try:
        return json.loads(raw)
    except ValueError as e:
        raise SerializationError(f"invalid JSON in response body: {e}") from e


def convert(value: Any, model: Optional[Any] = None) -> Any:
    """
    Validate a decoded JSON value into ``model``.

    ``model`` may be a pydantic model, a dataclass, or any type understood by
    ``pydantic.TypeAdapter`` (``dict[str, int]``, ``list[User]``...). Without a
    model the plain decoded value is returned.
    """
    if model is None:
        return value
    try:
        return TypeAdapter(model).validate_python(value)
    except ValidationError as e:
        raise SerializationError(f"cannot decode value into {model!r}: {e}") from e
