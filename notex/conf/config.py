"""Configuration module for notex.

Values are read once from the environment at import time. A ``.env`` file and
then a ``.env.local`` file in the working directory are loaded first; neither
overrides variables that are already set.
"""

import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()
load_dotenv(".env.local")


def get_env(key: str, default: str) -> str:
    """Return an environment variable, or ``default`` when unset or empty."""
    value = os.getenv(key)
    return value if value else default


def get_env_int(key: str, default: int) -> int:
    """Return an environment variable parsed as int, or ``default`` if it does not parse."""
    value = os.getenv(key)
    if value:
        try:
            return int(value)
        except ValueError:
            pass
    return default


def get_env_float(key: str, default: float) -> float:
    """Return an environment variable parsed as float, or ``default`` if it does not parse."""
    value = os.getenv(key)
    if value:
        try:
            return float(value)
        except ValueError:
            pass
    return default


def get_env_bool(key: str, default: bool) -> bool:
    """Return an environment variable parsed as a boolean.

    Accepts 1, t, true, 0, f and false in any case. Anything else yields
    ``default``.
    """
    value = os.getenv(key)
    if value:
        lowered = value.strip().lower()
        if lowered in ("1", "t", "true"):
            return True
        if lowered in ("0", "f", "false"):
            return False
    return default


def get_env_list(key: str, default: List[str]) -> List[str]:
    """Return a comma separated environment variable as a list of stripped items."""
    value = os.getenv(key)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


class ConfigMeta(type):
    """Metaclass to prevent direct instantiation and enforce singleton attributes."""

    def __call__(cls, *args: object, **kwargs: object) -> None:
        """Prevent direct instantiation."""
        raise TypeError("Config cannot be instantiated directly. Use class attributes.")


class Config(metaclass=ConfigMeta):
    """Singleton configuration class. Access attributes directly via the class."""

    # =========================================================================
    # Server Configuration
    # =========================================================================
    VERSION: str = "1.0.0"
    SERVER_HOST: str = get_env("SERVER_HOST", "0.0.0.0")
    SERVER_PORT: int = get_env_int("SERVER_PORT", 8080)
    LOG_LEVEL: str = get_env("LOG_LEVEL", "INFO")

    # =========================================================================
    # Chunker Configuration
    # =========================================================================
    CHUNK_SIZE: int = get_env_int("CHUNK_SIZE", 1000)
    CHUNK_OVERLAP: int = get_env_int("CHUNK_OVERLAP", 200)
    # Share of CJK unified ideographs above which text is split by character
    CJK_RATIO_THRESHOLD: float = get_env_float("CJK_RATIO_THRESHOLD", 0.3)

    # =========================================================================
    # Index Configuration
    # =========================================================================
    INDEX_MAX_CHUNKS: Optional[int] = get_env_int("INDEX_MAX_CHUNKS", 0) or None

    # =========================================================================
    # Retrieval Configuration
    # =========================================================================
    MAX_SOURCES: int = get_env_int("MAX_SOURCES", 5)  # chunks handed to the LLM
    # Queries containing one of these get a flat bonus on every chunk
    TOPIC_KEYWORDS: List[str] = get_env_list(
        "TOPIC_KEYWORDS", ["介绍", "什么", "啥", "内容", "文档", "说"]
    )
    CANCEL_CHECK_INTERVAL: int = 256

    # =========================================================================
    # Document Extraction Configuration
    # =========================================================================
    ENABLE_MARKITDOWN: bool = get_env_bool("ENABLE_MARKITDOWN", True)
    MARKITDOWN_COMMAND: str = get_env("MARKITDOWN_COMMAND", "markitdown")
    MARKITDOWN_EXTENSIONS: List[str] = [
        ".pdf",
        ".docx",
        ".doc",
        ".pptx",
        ".ppt",
        ".xlsx",
        ".xls",
    ]
