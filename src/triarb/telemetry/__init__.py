"""Logging setup."""

from triarb.telemetry.logger import QueuedLogger, log_duration, setup_logging


__all__ = [
    "QueuedLogger",
    "log_duration",
    "setup_logging",
]
