"""Runtime settings read from the environment and an optional .env file."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Settings shared by the CLI and the API."""

    log_level: str = "INFO"
    log_file: Optional[str] = None
    pretty: bool = True


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in TRUE_VALUES


def load_settings(env_file: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings, reading .env first.

    Variables already set in the environment win over the .env file.

    Environment:
        FEEDWRITER_LOG_LEVEL: Logging level name (default INFO).
        FEEDWRITER_LOG_FILE: Log file path; console only when unset.
        FEEDWRITER_PRETTY: Indent rendered XML (default true).
    """
    load_dotenv(env_file if env_file is not None else Path.cwd() / ".env")

    return Settings(
        log_level=os.getenv("FEEDWRITER_LOG_LEVEL", "INFO").upper(),
        log_file=os.getenv("FEEDWRITER_LOG_FILE") or None,
        pretty=_env_flag("FEEDWRITER_PRETTY", True),
    )
