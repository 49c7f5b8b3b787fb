"""
Runtime settings for the save decoder tools

Values come from the environment, optionally seeded from a .env file in the
working directory.
"""
import codecs
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Decoder and logging settings"""
    log_level: str = "WARNING"
    log_filter: str = ""
    log_to_file: bool = False
    string_encoding: str = "utf-8"
    max_workers: int = 4

    @classmethod
    def from_env(cls) -> 'Settings':
        """Build settings from LOG_* and VHSAVE_* environment variables"""
        encoding = os.getenv("VHSAVE_STRING_ENCODING", cls.string_encoding)
        try:
            codecs.lookup(encoding)
        except LookupError:
            raise ValueError(f"VHSAVE_STRING_ENCODING: unknown encoding '{encoding}'")

        log_level = os.getenv("LOG_LEVEL", cls.log_level).upper()
        try:
            logger.level(log_level)
        except ValueError:
            raise ValueError(f"LOG_LEVEL: unknown level '{log_level}'")

        raw_workers = os.getenv("VHSAVE_MAX_WORKERS", str(cls.max_workers))
        try:
            max_workers = int(raw_workers)
        except ValueError:
            raise ValueError(f"VHSAVE_MAX_WORKERS: not an integer '{raw_workers}'")
        if max_workers < 1:
            raise ValueError(f"VHSAVE_MAX_WORKERS must be at least 1, got {max_workers}")

        return cls(
            log_level=log_level,
            log_filter=os.getenv("LOG_FILTER", cls.log_filter),
            log_to_file=_env_bool("LOG_TO_FILE", cls.log_to_file),
            string_encoding=encoding,
            max_workers=max_workers,
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process wide settings, reading the environment on first use"""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
