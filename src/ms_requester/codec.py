"""JSON エンコード・デコード（pydantic TypeAdapter）"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from .exceptions import DeserializationError, SerializationError

_ANY: TypeAdapter[Any] = TypeAdapter(Any)


@lru_cache(maxsize=128)
def _adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


def encode_body(body: Any) -> bytes | None:
    """リクエストボディを JSON バイト列にする。None はボディなし。"""
    if body is None:
        return None
    try:
        return _ANY.dump_json(body)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise SerializationError(f"Failed to encode request body: {e}", cause=e) from e


def decode_body(content: bytes, response_type: Any = Any) -> Any:
    """JSON バイト列を response_type にデコードする。"""
    try:
        return _adapter(response_type).validate_json(content)
    except ValidationError as e:
        raise DeserializationError(
            f"Failed to decode response body as {response_type!r}: {e}",
            cause=e,
        ) from e
