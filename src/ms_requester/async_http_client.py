"""httpx.AsyncClient を使った非同期リクエスター"""

from __future__ import annotations

from http import HTTPStatus
from types import TracebackType
from typing import Any

import httpx

from .client import MAX_ATTEMPTS, BaseMsRequester
from .config import ConfigProvider
from .models import ExecutionResult, MsAuthConfig, MsRequest, RequesterConfig, ResponseData
from .token_cache import TokenCache


class AsyncMsRequester(BaseMsRequester):
    """認証付きサービス間 HTTP リクエスター（非同期）。

    タスクがキャンセルされた場合 asyncio.CancelledError はそのまま伝播し、
    レスポンス受信前であればトークンキャッシュは変更されない。
    """

    def __init__(
        self,
        config_provider: ConfigProvider,
        client: httpx.AsyncClient | None = None,
        token_cache: TokenCache | None = None,
        config: RequesterConfig | None = None,
    ) -> None:
        super().__init__(config_provider, token_cache, config)
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> AsyncMsRequester:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def request(
        self,
        ms_request: MsRequest,
        response_type: Any = Any,
        *,
        retry: bool = True,
        timeout: float | None = None,
    ) -> ResponseData[Any]:
        """非同期でリクエストを送信する。401 時は 1 回だけ再試行する。"""
        attempt = 1
        while True:
            request = await self.build_request(ms_request, timeout=timeout)
            result = await self.execute(ms_request.service, request, response_type)
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

    async def build_request(
        self,
        ms_request: MsRequest,
        timeout: float | None = None,
    ) -> httpx.Request:
        deadline = self._timeout(timeout)
        conf, request = self._prepare_request(self._client, ms_request, deadline)
        await self._attach_auth_headers(request, ms_request.service, conf, deadline)
        return request

    async def acquire_token(
        self,
        service: str,
        conf: MsAuthConfig,
        timeout: float | None = None,
    ) -> str:
        request = self._build_auth_request(self._client, conf, self._timeout(timeout))
        try:
            response = await self._client.send(request)
        except httpx.HTTPError as e:
            raise self._auth_transport_error(service, e) from e
        return self._extract_token(service, response)

    async def execute(
        self,
        service: str,
        request: httpx.Request,
        response_type: Any = Any,
    ) -> ExecutionResult[Any]:
        try:
            response = await self._client.send(request)
        except httpx.HTTPError as e:
            return self._transport_failure(service, request, e)
        return self._handle_response(service, request, response, response_type)

    async def _attach_auth_headers(
        self,
        request: httpx.Request,
        service: str,
        conf: MsAuthConfig,
        timeout: float,
    ) -> None:
        token = self._tokens.get(service)
        if token is None:
            token = await self.acquire_token(service, conf, timeout)
            self._tokens.set(service, token)
        self._set_auth_headers(request, token, conf)
