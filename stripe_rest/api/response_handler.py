# stripe_rest/api/response_handler.py
# Created: 2026-10-17 11:02:38

from typing import Any, Dict, List, Optional, Union, get_args, get_origin, get_type_hints
from enum import Enum
import dataclasses
import json
import logging
import types
from .errors import (
    DeserializationError,
    ErrorDetail,
    ErrorEnvelope,
    RequestError
)
from .models import Response

logger = logging.getLogger(__name__)

def decode_value(data: Any, target: Any) -> Any:
    """
    Convert decoded JSON into ``target``.

    Supports dataclasses (recursively), Optional/Union, List, Dict, Enum and
    the JSON scalar types. ``None`` and ``Any`` return the data unchanged.
    Unknown object keys are ignored; missing required fields fail.

    Raises:
        ValueError: if the data does not match the target shape
    """
    if target is None or target is Any or target is object:
        return data

    origin = get_origin(target)
    if origin is Union or origin is types.UnionType:
        args = get_args(target)
        if data is None:
            if type(None) in args:
                return None
            raise ValueError("unexpected null")
        errors = []
        for arg in args:
            if arg is type(None):
                continue
            try:
                return decode_value(data, arg)
            except ValueError as e:
                errors.append(str(e))
        raise ValueError(f"no variant matched: {'; '.join(errors)}")

    if origin in (list, List):
        if not isinstance(data, list):
            raise ValueError(f"invalid type: expected a sequence, got {_json_type(data)}")
        args = get_args(target)
        item_type = args[0] if args else None
        return [decode_value(item, item_type) for item in data]

    if origin in (dict, Dict):
        if not isinstance(data, dict):
            raise ValueError(f"invalid type: expected a map, got {_json_type(data)}")
        args = get_args(target)
        value_type = args[1] if len(args) == 2 else None
        return {key: decode_value(value, value_type) for key, value in data.items()}

    if dataclasses.is_dataclass(target) and isinstance(target, type):
        return _decode_dataclass(data, target)

    if isinstance(target, type) and issubclass(target, Enum):
        try:
            return target(data)
        except ValueError:
            raise ValueError(f"unknown variant {data!r} for {target.__name__}")

    if target is float:
        if isinstance(data, (int, float)) and not isinstance(data, bool):
            return float(data)
        raise ValueError(f"invalid type: expected a number, got {_json_type(data)}")

    if target is int:
        if isinstance(data, int) and not isinstance(data, bool):
            return data
        raise ValueError(f"invalid type: expected an integer, got {_json_type(data)}")

    if isinstance(target, type):
        if isinstance(data, target):
            return data
        raise ValueError(f"invalid type: expected {target.__name__}, got {_json_type(data)}")

    raise ValueError(f"unsupported decode target {target!r}")

def _decode_dataclass(data: Any, target: type) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"invalid type: expected {target.__name__} object, got {_json_type(data)}")

    hints = get_type_hints(target)
    kwargs: Dict[str, Any] = {}
    for f in dataclasses.fields(target):
        if not f.init or f.metadata.get("skip_decode"):
            continue
        if f.name in data:
            try:
                kwargs[f.name] = decode_value(data[f.name], hints.get(f.name))
            except ValueError as e:
                raise ValueError(f"{f.name}: {e}")
        elif f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            raise ValueError(f"missing field `{f.name}`")
    try:
        return target(**kwargs)
    except TypeError as e:
        raise ValueError(f"cannot build {target.__name__}: {e}")

def _json_type(data: Any) -> str:
    if data is None:
        return "null"
    if isinstance(data, bool):
        return "boolean"
    if isinstance(data, (int, float)):
        return "number"
    if isinstance(data, str):
        return "string"
    if isinstance(data, list):
        return "sequence"
    if isinstance(data, dict):
        return "map"
    return type(data).__name__

def _decode_body(body: bytes, target: Any) -> Any:
    text = body.decode("utf-8", errors="replace")
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        # Nesting deeper than the interpreter's recursion limit is a decode failure too.
        raise ValueError(str(e))
    return decode_value(data, target)

class ResponseHandler:
    """
    Classifies responses into decoded values or structured errors.

    2xx bodies are decoded into the requested type. Any other status raises
    ``RequestError``, even when the error body itself is not valid JSON.
    """

    @staticmethod
    def is_success(status: int) -> bool:
        return 200 <= status <= 299

    def classify(self, response: Response, expected_type: Optional[Any] = None) -> Any:
        """
        Process an API response

        Args:
            response: Completed response
            expected_type: Type to decode a successful body into

        Returns:
            The decoded body

        Raises:
            RequestError: for non-2xx statuses
            DeserializationError: if a 2xx body does not match expected_type
        """
        if not self.is_success(response.status):
            raise RequestError(self.extract_error(response))

        try:
            return _decode_body(response.body, expected_type)
        except ValueError as e:
            logger.error(f"Failed to decode response with status {response.status}: {str(e)}")
            raise DeserializationError(
                f"failed to deserialize response: {str(e)}",
                body=response.body,
                details={"http_status": response.status}
            ) from e

    def extract_error(self, response: Response) -> ErrorDetail:
        """
        Decode the error envelope of a failed response

        A body that is not a valid envelope yields a synthesized error whose
        message describes why decoding failed.
        """
        try:
            envelope = _decode_body(response.body, ErrorEnvelope)
        except ValueError as e:
            envelope = ErrorEnvelope(error=ErrorDetail(message=f"failed to deserialize error: {str(e)}"))

        envelope.error.http_status = response.status
        return envelope.error
