"""ms_requester データモデル"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator

from .exceptions import MsRequesterError

T = TypeVar("T")

# ワイヤ契約で決まっているヘッダー名とパス
AUTHORIZATION_HEADER = "Authorization"
CONTEXT_HEADER = "Context"
TOKEN_HEADER = "X-Token"
PAGE_CURSOR_HEADER = "X-Page-Cursor"
AUTH_PATH = "/auth/generate"


class MsAuthConfig(BaseModel):
    """サービスごとの認証情報と接続先（読み込み後は不変）。"""

    model_config = ConfigDict(frozen=True)

    token: str
    secret: str
    context: str
    base_url: str

    @field_validator("base_url")
    @classmethod
    def _check_scheme(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://: {value!r}")
        return value


@dataclass(frozen=True)
class MsRequest:
    """1 回の論理リクエスト。"""

    service: str
    method: str
    path: str
    body: Any = None


@dataclass
class ResponseData(Generic[T]):
    """レスポンスボディとページカーソルのエンベロープ。"""

    data: T | None = None
    page_cursor: str | None = None


@dataclass
class ExecutionResult(Generic[T]):
    """1 回の送信結果。status_code は送信失敗時 0。"""

    status_code: int
    response: ResponseData[T] = field(default_factory=ResponseData)
    error: MsRequesterError | None = None


@dataclass
class RequesterConfig:
    """リクエスター設定。"""

    timeout_seconds: float = 10.0
