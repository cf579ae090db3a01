"""サービス設定のユニットテスト"""

from pathlib import Path

import pytest
from ms_requester.config import StaticConfig, load_static_config
from ms_requester.exceptions import ConfigError, MsRequesterErrorCodes
from ms_requester.models import MsAuthConfig
from pydantic import ValidationError


def make_conf(name: str) -> MsAuthConfig:
    return MsAuthConfig(
        token=name,
        secret=name,
        context=name,
        base_url=f"http://{name}.local",
    )


def test_set_and_get_conf() -> None:
    """登録した設定を取得できること。"""
    conf = StaticConfig()
    conf.set("test", make_conf("test"))
    conf.set("test2", make_conf("test2"))
    assert conf.get("test").context == "test"
    assert len(conf) == 2


def test_get_unknown_service() -> None:
    """未登録サービスで ConfigError(CONFIG_NOT_FOUND) が発生すること。"""
    conf = StaticConfig({"test": make_conf("test")})
    with pytest.raises(ConfigError) as exc_info:
        conf.get("test2")
    assert exc_info.value.code == MsRequesterErrorCodes.CONFIG_NOT_FOUND
    assert "config not found for service: test2" in str(exc_info.value)


def test_get_from_empty_config() -> None:
    """空の設定では ConfigError(CONFIG_EMPTY) が発生すること。"""
    conf = StaticConfig()
    with pytest.raises(ConfigError) as exc_info:
        conf.get("test")
    assert exc_info.value.code == MsRequesterErrorCodes.CONFIG_EMPTY
    assert str(exc_info.value) == "CONFIG_EMPTY: config map is empty"


def test_lookup_is_case_sensitive() -> None:
    """サービス名は大文字小文字を区別すること。"""
    conf = StaticConfig({"User": make_conf("user")})
    with pytest.raises(ConfigError):
        conf.get("user")


def test_auth_config_is_frozen() -> None:
    """MsAuthConfig は変更できないこと。"""
    conf = make_conf("test")
    with pytest.raises(ValidationError):
        conf.token = "other"  # type: ignore[misc]


def test_auth_config_rejects_base_url_without_scheme() -> None:
    """スキームのない base_url は拒否されること。"""
    with pytest.raises(ValidationError):
        MsAuthConfig(token="t", secret="s", context="c", base_url="://invalid-url")


def test_load_static_config(tmp_path: Path) -> None:
    """YAML からサービス設定を読み込めること。"""
    config_file = tmp_path / "services.yaml"
    config_file.write_text(
        "services:\n"
        "  user:\n"
        "    token: abc\n"
        "    secret: xyz\n"
        "    context: tenant-a\n"
        "    base_url: http://user-service:8080\n"
    )
    conf = load_static_config(config_file)
    user = conf.get("user")
    assert user.token == "abc"
    assert user.base_url == "http://user-service:8080"


def test_load_empty_file_gives_empty_config(tmp_path: Path) -> None:
    """空ファイルは空の設定になり、参照時に CONFIG_EMPTY となること。"""
    config_file = tmp_path / "services.yaml"
    config_file.write_text("")
    conf = load_static_config(config_file)
    with pytest.raises(ConfigError) as exc_info:
        conf.get("user")
    assert exc_info.value.code == MsRequesterErrorCodes.CONFIG_EMPTY


def test_load_file_not_found(tmp_path: Path) -> None:
    """存在しないファイルで ConfigError(READ_FILE_ERROR) が発生すること。"""
    with pytest.raises(ConfigError) as exc_info:
        load_static_config(tmp_path / "missing.yaml")
    assert exc_info.value.code == MsRequesterErrorCodes.READ_FILE


def test_load_invalid_yaml(tmp_path: Path) -> None:
    """不正 YAML で ConfigError(PARSE_YAML_ERROR) が発生すること。"""
    bad_file = tmp_path / "bad.yaml"
    bad_file.write_text("services: {invalid: yaml: content:\n")
    with pytest.raises(ConfigError) as exc_info:
        load_static_config(bad_file)
    assert exc_info.value.code == MsRequesterErrorCodes.PARSE_YAML


def test_load_validation_error(tmp_path: Path) -> None:
    """必須項目の欠落で ConfigError(VALIDATION_ERROR) が発生すること。"""
    bad_file = tmp_path / "bad.yaml"
    bad_file.write_text("services:\n  user:\n    token: abc\n")
    with pytest.raises(ConfigError) as exc_info:
        load_static_config(bad_file)
    assert exc_info.value.code == MsRequesterErrorCodes.VALIDATION
