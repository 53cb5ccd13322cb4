"""
Utilities Module
================

Common utilities shared across the library:
- logger: Context logging with levels and secret redaction
- config: Environment configuration for the command line entry point
"""

from neuron.utils.logger import Logger, LoggerLike, LogLevel, redact
from neuron.utils.config import get_config, load_config, Config

__all__ = [
    "Logger",
    "LoggerLike",
    "LogLevel",
    "redact",
    "get_config",
    "load_config",
    "Config",
]
