"""Modjector Logging — logging port and structlog adapter."""

from modjector.logging.port import LoggingPort, LoggingSettings
from modjector.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "LoggingSettings", "StructlogAdapter"]
