"""YAML設定ファイルの読み込みと環境変数展開"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from neurochat.config.models import (
    DEFAULT_LOG_FORMAT,
    ChatConfig,
    Config,
    DatabaseConfig,
    LLMConfig,
    LoggingConfig,
    TelegramConfig,
)


class ConfigError(Exception):
    """設定関連の基底例外"""


class ConfigValidationError(ConfigError):
    """設定値のバリデーションエラー"""


class EnvironmentVariableError(ConfigError):
    """環境変数が見つからないエラー"""


# 環境変数パターン: ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def expand_env_vars(value: str) -> str:
    """文字列中の ${VAR_NAME} を環境変数の値に置換する

    Args:
        value: 置換対象の文字列

    Returns:
        環境変数が展開された文字列

    Raises:
        EnvironmentVariableError: 環境変数が未設定
    """
    if not value:
        return value

    def replace_var(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            raise EnvironmentVariableError(
                f"Environment variable '{var_name}' is not set"
            )
        return env_value

    return ENV_VAR_PATTERN.sub(replace_var, value)


def _expand_recursive(data: Any) -> Any:
    """データ構造を再帰的に走査し、文字列中の環境変数を展開する"""
    if isinstance(data, dict):
        return {key: _expand_recursive(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_recursive(item) for item in data]
    elif isinstance(data, str):
        return expand_env_vars(data)
    else:
        return data


def _validate_required_field(data: dict[str, Any], field: str, parent: str = "") -> Any:
    """必須フィールドの存在を検証する

    空文字列も未設定として扱う。

    Args:
        data: 検証対象のdict
        field: フィールド名
        parent: 親フィールド名（エラーメッセージ用）

    Returns:
        フィールドの値

    Raises:
        ConfigValidationError: フィールドが存在しない
    """
    if not isinstance(data, dict) or data.get(field) in (None, ""):
        full_path = f"{parent}.{field}" if parent else field
        raise ConfigValidationError(f"Required field '{full_path}' is missing")
    return data[field]


def _parse_non_negative_int(value: Any, path: str) -> int:
    """0 以上の整数として解釈する"""
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigValidationError(f"'{path}' must be an integer: {value!r}") from e
    if number < 0:
        raise ConfigValidationError(f"'{path}' must not be negative: {number}")
    return number


def load_config(path: str | Path) -> Config:
    """設定ファイルを読み込む

    Args:
        path: config.yaml のパス

    Returns:
        Config オブジェクト

    Raises:
        FileNotFoundError: ファイルが存在しない
        ConfigValidationError: 必須項目が欠落
        EnvironmentVariableError: 環境変数が未設定
        yaml.YAMLError: YAML構文エラー
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw_data = yaml.safe_load(f) or {}

    # 環境変数を展開
    data = _expand_recursive(raw_data)

    # 必須セクションの検証
    telegram_data = _validate_required_field(data, "telegram")
    database_data = _validate_required_field(data, "database")
    llm_data = _validate_required_field(data, "llm")

    telegram = TelegramConfig(
        bot_token=_validate_required_field(telegram_data, "bot_token", "telegram"),
        debug=bool(telegram_data.get("debug", False)),
    )

    database = DatabaseConfig(
        path=_validate_required_field(database_data, "path", "database"),
        connect_timeout_seconds=float(
            database_data.get("connect_timeout_seconds", 10.0)
        ),
    )

    llm = LLMConfig(
        base_url=_validate_required_field(llm_data, "base_url", "llm").rstrip("/"),
        model=llm_data.get("model", "local"),
        api_key=llm_data.get("api_key", "none"),
        timeout_seconds=float(llm_data.get("timeout_seconds", 30.0)),
    )

    # ChatConfig (optional)
    chat_data = data.get("chat") or {}
    chat = ChatConfig(
        history_limit=_parse_non_negative_int(
            chat_data.get("history_limit", 10), "chat.history_limit"
        ),
    )

    # LoggingConfig (optional)
    logging_config: LoggingConfig | None = None
    logging_data = data.get("logging")
    if logging_data:
        logging_config = LoggingConfig(
            level=logging_data.get("level", "INFO"),
            format=logging_data.get("format", DEFAULT_LOG_FORMAT),
            loggers=logging_data.get("loggers"),
            debug_llm_messages=logging_data.get("debug_llm_messages", False),
        )

    return Config(
        telegram=telegram,
        database=database,
        llm=llm,
        chat=chat,
        logging=logging_config,
    )
