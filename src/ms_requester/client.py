"""リクエスター共通処理（I/O を伴わない部分）"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

import httpx

from .codec import decode_body, encode_body
from .config import ConfigProvider
from .exceptions import AuthError, DeserializationError, RequestFailedError, TransportError
from .logger import get_logger
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

logger = get_logger(__name__)

# 初回 + 401 時の再試行 1 回
MAX_ATTEMPTS = 2


class BaseMsRequester:
    """同期・非同期リクエスターの共通部分。

    設定解決、ボディのエンコード、認証ヘッダーの付与、レスポンスの解釈と
    トークンの機会的更新を担う。送信そのものはサブクラスが行う。
    """

    def __init__(
        self,
        config_provider: ConfigProvider,
        token_cache: TokenCache | None = None,
        config: RequesterConfig | None = None,
    ) -> None:
        self._confs = config_provider
        self._tokens = token_cache if token_cache is not None else TokenCache()
        self._config = config or RequesterConfig()

    @property
    def token_cache(self) -> TokenCache:
        return self._tokens

    def _timeout(self, timeout: float | None) -> float:
        return self._config.timeout_seconds if timeout is None else timeout

    def _prepare_request(
        self,
        client: httpx.Client | httpx.AsyncClient,
        ms_request: MsRequest,
        timeout: float,
    ) -> tuple[MsAuthConfig, httpx.Request]:
        """設定を解決し、認証ヘッダー以外を組み立てたリクエストを返す。"""
        conf = self._confs.get(ms_request.service)
        content = encode_body(ms_request.body)
        headers = {"Content-Type": "application/json"} if content is not None else None
        request = client.build_request(
            ms_request.method,
            conf.base_url + ms_request.path,
            content=content,
            headers=headers,
            timeout=timeout,
        )
        return conf, request

    def _build_auth_request(
        self,
        client: httpx.Client | httpx.AsyncClient,
        conf: MsAuthConfig,
        timeout: float,
    ) -> httpx.Request:
        return client.build_request(
            "POST",
            conf.base_url + AUTH_PATH,
            json={"token": conf.token, "secret": conf.secret},
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )

    def _extract_token(self, service: str, response: httpx.Response) -> str:
        token = response.headers.get(TOKEN_HEADER, "")
        if not token or response.status_code != HTTPStatus.NO_CONTENT:
            logger.warning(
                "token_acquisition_failed",
                service=service,
                status_code=response.status_code,
            )
            raise AuthError("error to authenticate, empty token or invalid status code")
        logger.info("token_acquired", service=service)
        return token

    def _auth_transport_error(self, service: str, error: httpx.HTTPError) -> AuthError:
        logger.warning("token_acquisition_failed", service=service, error=str(error))
        return AuthError(f"error to authenticate: {error}", cause=error)

    @staticmethod
    def _set_auth_headers(request: httpx.Request, token: str, conf: MsAuthConfig) -> None:
        request.headers[AUTHORIZATION_HEADER] = token
        request.headers[CONTEXT_HEADER] = conf.context

    def _transport_failure(
        self,
        service: str,
        request: httpx.Request,
        error: httpx.HTTPError,
    ) -> ExecutionResult[Any]:
        logger.warning(
            "request_transport_error",
            service=service,
            url=str(request.url),
            error=str(error),
        )
        return ExecutionResult(
            status_code=0,
            error=TransportError(f"request to {request.url} failed: {error}", cause=error),
        )

    def _handle_response(
        self,
        service: str,
        request: httpx.Request,
        response: httpx.Response,
        response_type: Any,
    ) -> ExecutionResult[Any]:
        """受信済みレスポンスを ExecutionResult に変換する。"""
        result: ExecutionResult[Any] = ExecutionResult(
            status_code=response.status_code,
            response=ResponseData(page_cursor=response.headers.get(PAGE_CURSOR_HEADER)),
        )

        self._refresh_token(service, response)

        if response.status_code != HTTPStatus.NO_CONTENT:
            try:
                result.response.data = decode_body(response.content, response_type)
            except DeserializationError as e:
                result.error = e
                return result

        if response.status_code > 299:
            logger.info(
                "request_failed",
                service=service,
                url=str(request.url),
                status_code=response.status_code,
            )
            result.error = RequestFailedError(str(request.url), response.status_code)
        return result

    def _refresh_token(self, service: str, response: httpx.Response) -> None:
        # 既存エントリの更新のみ。エントリが無ければ作らない
        token = response.headers.get(TOKEN_HEADER, "")
        if token and self._tokens.replace_if_present(service, token):
            logger.info("token_refreshed", service=service)

    def _invalidate(self, service: str) -> None:
        self._tokens.delete(service)
        logger.info("token_invalidated", service=service, reason="unauthorized")
