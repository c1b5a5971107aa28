import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .logger import get_logger

DEFAULT_DEBOUNCE_MS = 300
DEFAULT_HTTP_TIMEOUT = 15.0
DEFAULT_DATA_SOURCE = "data/faculty.json"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_env(env_path: Optional[Path] = None) -> bool:
    """Load .env from the working directory (or env_path) if present.

    Existing environment variables win over values in the file.
    Returns True when a file was loaded.
    """
    env_path = env_path or Path.cwd() / ".env"
    if not env_path.exists():
        return False
    load_dotenv(dotenv_path=env_path, override=False)
    return True


def _positive_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        get_logger().warning(f"Ignoring invalid {name}", value=raw, default=default)
        return default
    if value < 0:
        get_logger().warning(f"Ignoring negative {name}", value=raw, default=default)
        return default
    return value


def log_level_from_env() -> str:
    """PEOPLEDIR_LOG_LEVEL if it names a logging level, else INFO."""
    level = (os.getenv("PEOPLEDIR_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    return level if level in LOG_LEVELS else DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class Settings:
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    data_source: str = DEFAULT_DATA_SOURCE
    log_level: str = DEFAULT_LOG_LEVEL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    @classmethod
    def from_env(cls) -> "Settings":
        """Read PEOPLEDIR_* variables, falling back to defaults."""
        return cls(
            debounce_ms=_positive_number("PEOPLEDIR_DEBOUNCE_MS", DEFAULT_DEBOUNCE_MS, int),
            data_source=os.getenv("PEOPLEDIR_DATA") or DEFAULT_DATA_SOURCE,
            log_level=log_level_from_env(),
            http_timeout=_positive_number("PEOPLEDIR_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT, float),
        )
