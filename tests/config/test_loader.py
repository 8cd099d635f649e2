"""設定ローダーのテスト"""

import os
from pathlib import Path
from typing import Generator

import pytest
import yaml

from neurochat.config import (
    ChatConfig,
    Config,
    ConfigValidationError,
    EnvironmentVariableError,
    LLMConfig,
    TelegramConfig,
    expand_env_vars,
    load_config,
)


@pytest.fixture
def env_vars() -> Generator[dict[str, str], None, None]:
    """テスト用環境変数を設定・クリーンアップ"""
    test_vars = {
        "TEST_BOT_TOKEN": "123456:test-token",
        "TEST_VAR_A": "valueA",
        "TEST_VAR_B": "valueB",
    }
    for key, value in test_vars.items():
        os.environ[key] = value
    yield test_vars
    for key in test_vars:
        os.environ.pop(key, None)


def write_config(tmp_path: Path, data: dict) -> Path:
    """設定ファイルを書き出す"""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump(data), encoding="utf-8")
    return config_path


def minimal_config() -> dict:
    """必須項目のみの設定"""
    return {
        "telegram": {"bot_token": "${TEST_BOT_TOKEN}"},
        "database": {"path": "./data/neurochat.db"},
        "llm": {"base_url": "http://localhost:8080/"},
    }


class TestExpandEnvVars:
    """expand_env_vars関数のテスト"""

    def test_single_variable(self, env_vars: dict[str, str]) -> None:
        """単一の変数を展開できる"""
        assert expand_env_vars("${TEST_BOT_TOKEN}") == "123456:test-token"

    def test_multiple_variables(self, env_vars: dict[str, str]) -> None:
        """複数の変数を展開できる"""
        assert expand_env_vars("${TEST_VAR_A}_${TEST_VAR_B}") == "valueA_valueB"

    def test_no_variables(self) -> None:
        """変数がなければそのまま返す"""
        assert expand_env_vars("plain text") == "plain text"

    def test_empty_string(self) -> None:
        """空文字列はそのまま返す"""
        assert expand_env_vars("") == ""

    def test_undefined_variable(self) -> None:
        """未設定の変数はエラー"""
        os.environ.pop("UNDEFINED_NEUROCHAT_VAR", None)
        with pytest.raises(EnvironmentVariableError, match="UNDEFINED_NEUROCHAT_VAR"):
            expand_env_vars("${UNDEFINED_NEUROCHAT_VAR}")


class TestLoadConfig:
    """load_config関数のテスト"""

    def test_minimal_config(self, tmp_path: Path, env_vars: dict[str, str]) -> None:
        """必須項目のみで読み込め、既定値が入る"""
        config = load_config(write_config(tmp_path, minimal_config()))

        assert isinstance(config, Config)
        assert config.telegram == TelegramConfig(
            bot_token="123456:test-token", debug=False
        )
        assert config.database.path == "./data/neurochat.db"
        assert config.database.connect_timeout_seconds == 10.0
        assert config.llm == LLMConfig(
            base_url="http://localhost:8080",
            model="local",
            api_key="none",
            timeout_seconds=30.0,
        )
        assert config.chat == ChatConfig(history_limit=10)
        assert config.logging is None

    def test_full_config(self, tmp_path: Path, env_vars: dict[str, str]) -> None:
        """全項目を読み込める"""
        data = minimal_config()
        data["telegram"]["debug"] = True
        data["database"]["connect_timeout_seconds"] = 5
        data["llm"].update(
            {"model": "mistral", "api_key": "secret", "timeout_seconds": 60}
        )
        data["chat"] = {"history_limit": 100}
        data["logging"] = {
            "level": "DEBUG",
            "loggers": {"httpx": "WARNING"},
            "debug_llm_messages": True,
        }

        config = load_config(write_config(tmp_path, data))

        assert config.telegram.debug is True
        assert config.database.connect_timeout_seconds == 5.0
        assert config.llm.model == "mistral"
        assert config.llm.api_key == "secret"
        assert config.llm.timeout_seconds == 60.0
        assert config.chat.history_limit == 100
        assert config.logging is not None
        assert config.logging.level == "DEBUG"
        assert config.logging.loggers == {"httpx": "WARNING"}
        assert config.logging.debug_llm_messages is True

    def test_file_not_found(self, tmp_path: Path) -> None:
        """ファイルが存在しない場合はエラー"""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path: Path) -> None:
        """空ファイルは必須項目欠落エラー"""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("", encoding="utf-8")

        with pytest.raises(ConfigValidationError, match="telegram"):
            load_config(config_path)

    @pytest.mark.parametrize("section", ["telegram", "database", "llm"])
    def test_missing_section(
        self, tmp_path: Path, env_vars: dict[str, str], section: str
    ) -> None:
        """必須セクションが欠落している場合はエラー"""
        data = minimal_config()
        del data[section]

        with pytest.raises(ConfigValidationError, match=section):
            load_config(write_config(tmp_path, data))

    @pytest.mark.parametrize(
        ("section", "field"),
        [("telegram", "bot_token"), ("database", "path"), ("llm", "base_url")],
    )
    def test_empty_required_field(
        self, tmp_path: Path, env_vars: dict[str, str], section: str, field: str
    ) -> None:
        """必須フィールドが空文字列の場合はエラー"""
        data = minimal_config()
        data[section][field] = ""

        with pytest.raises(ConfigValidationError, match=f"{section}.{field}"):
            load_config(write_config(tmp_path, data))

    def test_missing_env_var(self, tmp_path: Path) -> None:
        """参照した環境変数が未設定の場合はエラー"""
        os.environ.pop("TEST_BOT_TOKEN", None)

        with pytest.raises(EnvironmentVariableError):
            load_config(write_config(tmp_path, minimal_config()))

    @pytest.mark.parametrize("value", ["many", -1])
    def test_invalid_history_limit(
        self, tmp_path: Path, env_vars: dict[str, str], value: object
    ) -> None:
        """history_limit が不正な場合はエラー"""
        data = minimal_config()
        data["chat"] = {"history_limit": value}

        with pytest.raises(ConfigValidationError, match="chat.history_limit"):
            load_config(write_config(tmp_path, data))

    def test_zero_history_limit(
        self, tmp_path: Path, env_vars: dict[str, str]
    ) -> None:
        """history_limit に 0 を指定できる"""
        data = minimal_config()
        data["chat"] = {"history_limit": 0}

        config = load_config(write_config(tmp_path, data))

        assert config.chat.history_limit == 0
