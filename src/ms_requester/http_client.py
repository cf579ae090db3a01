"""httpx.Client を使った同期リクエスター"""

from __future__ import annotations

from http import HTTPStatus
from types import TracebackType
from typing import Any

import httpx

from .client import MAX_ATTEMPTS, BaseMsRequester
from .config import ConfigProvider
from .models import ExecutionResult, MsAuthConfig, MsRequest, RequesterConfig, ResponseData
from .token_cache import TokenCache


class MsRequester(BaseMsRequester):
    """認証付きサービス間 HTTP リクエスター（同期）。

    Args:
        config_provider: サービス設定の取得元
        client: 送信に使う httpx.Client。省略時は内部で生成し close() で閉じる
        token_cache: 共有するトークンキャッシュ。省略時は新規作成
        config: タイムアウトなどのリクエスター設定
    """

    def __init__(
        self,
        config_provider: ConfigProvider,
        client: httpx.Client | None = None,
        token_cache: TokenCache | None = None,
        config: RequesterConfig | None = None,
    ) -> None:
        super().__init__(config_provider, token_cache, config)
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> MsRequester:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def request(
        self,
        ms_request: MsRequest,
        response_type: Any = Any,
        *,
        retry: bool = True,
        timeout: float | None = None,
    ) -> ResponseData[Any]:
        """リクエストを送信し、デコード済みレスポンスを返す。

        401 を受けた場合はキャッシュ済みトークンを破棄し、1 回だけ再試行する。

        Raises:
            ConfigError, SerializationError, AuthError: リクエスト構築時（再試行しない）
            TransportError, DeserializationError, RequestFailedError: 送信後
        """
        attempt = 1
        while True:
            request = self.build_request(ms_request, timeout=timeout)
            result = self.execute(ms_request.service, request, response_type)
            if (
                result.status_code == HTTPStatus.UNAUTHORIZED
                and retry
                and attempt < MAX_ATTEMPTS
            ):
                self._invalidate(ms_request.service)
                attempt += 1
                continue
            if result.error is not None:
                raise result.error
            return result.response

    def build_request(self, ms_request: MsRequest, timeout: float | None = None) -> httpx.Request:
        """送信可能な httpx.Request を組み立てる（必要ならトークンを取得）。"""
        deadline = self._timeout(timeout)
        conf, request = self._prepare_request(self._client, ms_request, deadline)
        self._attach_auth_headers(request, ms_request.service, conf, deadline)
        return request

    def acquire_token(self, service: str, conf: MsAuthConfig, timeout: float | None = None) -> str:
        """認証エンドポイントから新しいトークンを取得する。キャッシュは変更しない。"""
        request = self._build_auth_request(self._client, conf, self._timeout(timeout))
        try:
            response = self._client.send(request)
        except httpx.HTTPError as e:
            raise self._auth_transport_error(service, e) from e
        return self._extract_token(service, response)

    def execute(
        self,
        service: str,
        request: httpx.Request,
        response_type: Any = Any,
    ) -> ExecutionResult[Any]:
        """組み立て済みリクエストを送信する。エラーは送出せず結果に格納する。"""
        try:
            response = self._client.send(request)
        except httpx.HTTPError as e:
            return self._transport_failure(service, request, e)
        return self._handle_response(service, request, response, response_type)

    def _attach_auth_headers(
        self,
        request: httpx.Request,
        service: str,
        conf: MsAuthConfig,
        timeout: float,
    ) -> None:
        token = self._tokens.get(service)
        if token is None:
            token = self.acquire_token(service, conf, timeout)
            self._tokens.set(service, token)
        self._set_auth_headers(request, token, conf)
