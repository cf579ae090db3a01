"""ms_requester ライブラリの例外型定義"""

from __future__ import annotations


class MsRequesterError(Exception):
    """ms_requester ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class MsRequesterErrorCodes:
    """MsRequesterError のエラーコード定数。"""

    CONFIG_EMPTY: str = "CONFIG_EMPTY"
    CONFIG_NOT_FOUND: str = "CONFIG_NOT_FOUND"
    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
    SERIALIZATION: str = "SERIALIZATION_ERROR"
    DESERIALIZATION: str = "DESERIALIZATION_ERROR"
    AUTH_FAILED: str = "AUTH_FAILED"
    TRANSPORT: str = "TRANSPORT_ERROR"
    REQUEST_FAILED: str = "REQUEST_FAILED"


class ConfigError(MsRequesterError):
    """サービス設定が存在しない・読み込めない場合のエラー。リトライしない。"""


class SerializationError(MsRequesterError):
    """リクエストボディを JSON にエンコードできない場合のエラー。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(MsRequesterErrorCodes.SERIALIZATION, message, cause)


class DeserializationError(MsRequesterError):
    """レスポンスボディを期待する型にデコードできない場合のエラー。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(MsRequesterErrorCodes.DESERIALIZATION, message, cause)


class AuthError(MsRequesterError):
    """トークン取得に失敗した場合のエラー。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(MsRequesterErrorCodes.AUTH_FAILED, message, cause)


class TransportError(MsRequesterError):
    """接続失敗・タイムアウトなどネットワークレベルのエラー。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(MsRequesterErrorCodes.TRANSPORT, message, cause)


class RequestFailedError(MsRequesterError):
    """HTTP ステータスが 299 を超えた場合のエラー。"""

    def __init__(self, url: str, status_code: int) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(
            MsRequesterErrorCodes.REQUEST_FAILED,
            f"request to {url} failed [{status_code}]",
        )
