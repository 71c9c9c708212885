"""Utility modules for logging and configuration."""

from .logger import setup_logger
from .config import Settings, load_settings

__all__ = ["setup_logger", "Settings", "load_settings"]
