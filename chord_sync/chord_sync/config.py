"""環境変数からの設定読み込み"""

import dataclasses
import logging
import os

from chord_sync.exceptions import ConfigError

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_PROGRESS_INTERVAL = 0.25
DEFAULT_REQUEST_TIMEOUT = 60.0


def _get_positive_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e
    if not value > 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def _get_log_level(name: str, default: str) -> str:
    level = (os.getenv(name) or "").strip().upper() or default
    if level not in logging.getLevelNamesMapping():
        raise ConfigError(f"{name} must be a logging level name, got {level!r}")
    return level


@dataclasses.dataclass
class Settings:
    """アプリの設定

    Attributes
    ----------
    api_key
        Gemini の API キー
    model
    progress_interval
        再生位置を通知する間隔(秒)
    request_timeout
        生成リクエストのタイムアウト(秒)
    log_level
    """

    api_key: str = ""
    model: str = DEFAULT_MODEL
    progress_interval: float = DEFAULT_PROGRESS_INTERVAL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or "",
            model=os.getenv("CHORD_SYNC_MODEL") or DEFAULT_MODEL,
            progress_interval=_get_positive_float(
                "CHORD_SYNC_PROGRESS_INTERVAL", DEFAULT_PROGRESS_INTERVAL
            ),
            request_timeout=_get_positive_float(
                "CHORD_SYNC_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT
            ),
            log_level=_get_log_level("CHORD_SYNC_LOG_LEVEL", "INFO"),
        )
