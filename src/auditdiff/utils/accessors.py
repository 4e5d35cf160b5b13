from collections.abc import Mapping
from typing import Any

SCALAR_TYPES = (str, bytes, bytearray, int, float, complex)


def get_field(instance: Any, key: str) -> Any:
    """
    Reads a field from a mapping, a Pydantic model or a plain object.
    Missing keys and attributes read as None. Scalars have no fields, and
    methods are not field values.
    """
    if instance is None or isinstance(instance, SCALAR_TYPES):
        return None
    if isinstance(instance, Mapping):
        return instance.get(key)
    value = getattr(instance, key, None)
    if callable(value):
        return None
    return value
