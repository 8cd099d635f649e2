"""設定データクラス"""

from dataclasses import dataclass

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class TelegramConfig:
    """Telegram接続設定"""

    bot_token: str
    debug: bool = False


@dataclass
class DatabaseConfig:
    """データベース設定"""

    path: str
    connect_timeout_seconds: float = 10.0


@dataclass
class LLMConfig:
    """LLM設定（llama-server の OpenAI 互換エンドポイント）"""

    base_url: str
    model: str = "local"
    api_key: str = "none"
    timeout_seconds: float = 30.0


@dataclass
class ChatConfig:
    """チャット設定"""

    history_limit: int = 10


@dataclass
class LoggingConfig:
    """ログ設定"""

    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    loggers: dict[str, str] | None = None
    debug_llm_messages: bool = False


@dataclass
class Config:
    """アプリケーション設定"""

    telegram: TelegramConfig
    database: DatabaseConfig
    llm: LLMConfig
    chat: ChatConfig
    logging: LoggingConfig | None = None
