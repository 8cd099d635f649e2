"""設定管理モジュール"""

from neurochat.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    expand_env_vars,
    load_config,
)
from neurochat.config.models import (
    ChatConfig,
    Config,
    DatabaseConfig,
    LLMConfig,
    LoggingConfig,
    TelegramConfig,
)

__all__ = [
    "ChatConfig",
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "DatabaseConfig",
    "EnvironmentVariableError",
    "LLMConfig",
    "LoggingConfig",
    "TelegramConfig",
    "expand_env_vars",
    "load_config",
]
