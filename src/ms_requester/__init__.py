"""ms_requester library."""

from .async_http_client import AsyncMsRequester
from .client import BaseMsRequester
from .codec import decode_body, encode_body
from .config import ConfigProvider, StaticConfig, load_static_config
from .exceptions import (
    AuthError,
    ConfigError,
    DeserializationError,
    MsRequesterError,
    MsRequesterErrorCodes,
    RequestFailedError,
    SerializationError,
    TransportError,
)
from .http_client import MsRequester
from .logger import get_logger, new_logger
from .models import (
    AUTH_PATH,
    AUTHORIZATION_HEADER,
    CONTEXT_HEADER,
    PAGE_CURSOR_HEADER,
    TOKEN_HEADER,
    ExecutionResult,
    MsAuthConfig,
    MsRequest,
    RequesterConfig,
    ResponseData,
)
from .token_cache import TokenCache

__all__ = [
    "MsRequester",
    "AsyncMsRequester",
    "BaseMsRequester",
    "TokenCache",
    "ConfigProvider",
    "StaticConfig",
    "load_static_config",
    "MsAuthConfig",
    "MsRequest",
    "ResponseData",
    "ExecutionResult",
    "RequesterConfig",
    "encode_body",
    "decode_body",
    "new_logger",
    "get_logger",
    "AUTH_PATH",
    "AUTHORIZATION_HEADER",
    "CONTEXT_HEADER",
    "PAGE_CURSOR_HEADER",
    "TOKEN_HEADER",
    "MsRequesterError",
    "MsRequesterErrorCodes",
    "ConfigError",
    "SerializationError",
    "DeserializationError",
    "AuthError",
    "TransportError",
    "RequestFailedError",
]
