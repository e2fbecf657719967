"""Utility helpers - timing and logging setup."""

from .logging_setup import configure_logging
from .profiling import StageTimer

__all__ = ["StageTimer", "configure_logging"]
