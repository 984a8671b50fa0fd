# stripe_rest/api/encoder.py
# Created: 2026-10-17 10:34:12

"""
Form encoding of request parameters.

Nested values are flattened into bracketed keys the way the service expects
them (``card[number]``, ``items[0][price]``). Output order follows dataclass
field order, mapping insertion order and sequence order, so encoding the same
value always yields the same bytes.
"""

from typing import Any, Iterator, Mapping, Tuple
from decimal import Decimal
from enum import Enum
from urllib.parse import urlencode
import dataclasses
from .errors import SerializationError

def encode_params(params: Any) -> bytes:
    """
    Encode a parameter structure as a form body.

    Args:
        params: A dataclass instance or a mapping, possibly nested

    Returns:
        The urlencoded body as ASCII bytes

    Raises:
        SerializationError: if any value cannot be encoded
    """
    if not (_is_dataclass_instance(params) or isinstance(params, Mapping)):
        raise SerializationError(
            f"top-level params must be a dataclass or mapping, got {type(params).__name__}"
        )
    pairs = list(iter_pairs(params))
    return urlencode(pairs).encode("ascii")

def iter_pairs(value: Any, prefix: str = "") -> Iterator[Tuple[str, str]]:
    """Yield flattened ``(key, value)`` pairs, skipping absent values"""
    if value is None:
        return

    if _is_dataclass_instance(value):
        for f in dataclasses.fields(value):
            yield from iter_pairs(getattr(value, f.name), _join(prefix, f.name))
        return

    if isinstance(value, Mapping):
        for key, item in value.items():
            if isinstance(key, Enum):
                key = key.value
            if not isinstance(key, str):
                raise SerializationError(
                    f"mapping keys must be strings, got {type(key).__name__} at {prefix or '<root>'}"
                )
            yield from iter_pairs(item, _join(prefix, key))
        return

    if isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            yield from iter_pairs(item, _join(prefix, str(index)))
        return

    if not prefix:
        raise SerializationError(f"cannot encode bare value of type {type(value).__name__}")
    yield prefix, _encode_leaf(value, prefix)

def _encode_leaf(value: Any, key: str) -> str:
    if isinstance(value, Enum):
        value = value.value
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, Decimal)):
        return str(value)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            raise SerializationError(f"cannot encode non-finite float at {key}")
        return repr(value)
    raise SerializationError(
        f"cannot encode value of type {type(value).__name__} at {key}",
        details={"key": key}
    )

def _join(prefix: str, key: str) -> str:
    return f"{prefix}[{key}]" if prefix else key

def _is_dataclass_instance(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)

