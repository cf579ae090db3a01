"""サービス設定プロバイダー"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError, MsRequesterErrorCodes
from .models import MsAuthConfig


class ConfigProvider(ABC):
    """サービス識別子から認証設定を引くプロバイダー抽象基底クラス。"""

    @abstractmethod
    def get(self, service: str) -> MsAuthConfig:
        """サービスの設定を返す。

        Raises:
            ConfigError: 設定が空、またはサービスが見つからない場合
        """
        ...


class StaticConfig(ConfigProvider):
    """辞書ベースの静的設定。キーは大文字小文字を区別する完全一致。"""

    def __init__(self, services: dict[str, MsAuthConfig] | None = None) -> None:
        self._services: dict[str, MsAuthConfig] = dict(services or {})

    def set(self, service: str, conf: MsAuthConfig) -> None:
        self._services[service] = conf

    def get(self, service: str) -> MsAuthConfig:
        if not self._services:
            raise ConfigError(
                code=MsRequesterErrorCodes.CONFIG_EMPTY,
                message="config map is empty",
            )
        conf = self._services.get(service)
        if conf is None:
            raise ConfigError(
                code=MsRequesterErrorCodes.CONFIG_NOT_FOUND,
                message=f"config not found for service: {service}",
            )
        return conf

    def __len__(self) -> int:
        return len(self._services)


class _ServicesFile(BaseModel):
    services: dict[str, MsAuthConfig] = Field(default_factory=dict)


def load_static_config(path: Path) -> StaticConfig:
    """YAML ファイルからサービス設定を読み込む。

    形式::

        services:
          user:
            token: abc
            secret: xyz
            context: tenant-a
            base_url: http://user-service:8080
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            code=MsRequesterErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        data: dict[str, Any] = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(
            code=MsRequesterErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    try:
        parsed = _ServicesFile.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            code=MsRequesterErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
    return StaticConfig(parsed.services)
