"""Shared utilities, configuration and errors."""

from nikkei_yprice.shared.config import Config
from nikkei_yprice.shared.utils import setup_logger

__all__ = ["Config", "setup_logger"]
