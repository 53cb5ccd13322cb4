"""
Logger Utility
==============

A small context-aware logger used across the library:

1. Log levels (DEBUG, INFO, WARNING, ERROR)
2. Structured output with timestamps
3. Context prefixes and child loggers ([Agent:WeatherAgent:Tools])
4. Color-coded terminal output
5. Secret redaction for anything that may carry credentials

Components never reach for a global logger: the Agent and the model gateway
take one as a constructor argument (anything matching ``LoggerLike``), and
only fall back to a fresh ``Logger`` with their own context.

Usage:
    from neuron.utils.logger import Logger

    logger = Logger("Agent")
    logger.info("Starting up")
    logger.debug("Message", {"role": "user"})

    tool_logger = logger.child("Tools")   # [Agent:Tools]
"""

import json
import os
import re
import sys
import traceback
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Iterable, Protocol


class LogLevel(IntEnum):
    """
    Log levels with numeric values for comparison.
    Higher values = more severe = always shown.
    """
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40


class Colors:
    """ANSI escape codes for colored terminal output."""
    RESET = "\033[0m"
    DEBUG = "\033[36m"    # Cyan
    INFO = "\033[32m"     # Green
    WARNING = "\033[33m"  # Yellow
    ERROR = "\033[31m"    # Red
    DIM = "\033[2m"       # Dimmed text


REDACTED = "***"

# Shorter secrets are matched as whole words only
MIN_SUBSTRING_SECRET = 4

_LEVEL_NAMES = {
    "DEBUG": LogLevel.DEBUG,
    "INFO": LogLevel.INFO,
    "WARNING": LogLevel.WARNING,
    "WARN": LogLevel.WARNING,
    "ERROR": LogLevel.ERROR,
}


def parse_log_level(value: str | None, default: LogLevel = LogLevel.INFO) -> LogLevel:
    """Map a level name such as "debug" or "WARN" to a LogLevel."""
    if not value:
        return default
    return _LEVEL_NAMES.get(value.upper(), default)


def _get_log_level_from_env() -> LogLevel:
    """Read LOG_LEVEL, defaulting to INFO."""
    return parse_log_level(os.getenv("LOG_LEVEL"))


def _secret_forms(secret: str) -> set[str]:
    """The secret as written, and as it reads inside a JSON string."""
    return {
        secret,
        json.dumps(secret)[1:-1],
        json.dumps(secret, ensure_ascii=False)[1:-1],
    }


def redact(text: str, secrets: Iterable[str]) -> str:
    """
    Mask every secret value that appears in ``text``.

    JSON-escaped forms of each secret are masked too, so a secret with quotes,
    backslashes or non-ASCII characters is hidden inside serialized payloads.
    Longer secrets are replaced first so a secret that contains another one is
    masked whole. Secrets shorter than MIN_SUBSTRING_SECRET are only masked
    where they stand alone as a word, not inside other words.

    Args:
        text: The text to clean
        secrets: Secret values (not names) to hide

    Returns:
        The text with each secret replaced by ``***``
    """
    forms = set()
    for secret in secrets:
        if secret:
            forms |= _secret_forms(secret)

    for form in sorted(forms, key=len, reverse=True):
        if len(form) >= MIN_SUBSTRING_SECRET:
            text = text.replace(form, REDACTED)
        else:
            text = re.sub(rf"(?<!\w){re.escape(form)}(?!\w)", REDACTED, text)
    return text


class LoggerLike(Protocol):
    """What the library needs from an injected logger."""

    def debug(self, message: str, data: dict[str, Any] | None = None) -> None: ...

    def info(self, message: str, data: dict[str, Any] | None = None) -> None: ...

    def warning(self, message: str, data: dict[str, Any] | None = None) -> None: ...

    def error(self, message: str, error: BaseException | None = None) -> None: ...


class Logger:
    """
    A context-aware logger with colored output.

    Example:
        logger = Logger("LLM")
        logger.info("Calling openai")

        child = logger.child("Retry")
        child.debug("Attempt", {"n": 2})
    """

    def __init__(self, context: str = "", level: LogLevel | None = None):
        """
        Initialize a logger.

        Args:
            context: Prefix for all log messages (e.g., "Agent", "LLM")
            level: Minimum level to emit; defaults to LOG_LEVEL from the environment
        """
        self.context = context
        self._min_level = level if level is not None else _get_log_level_from_env()

    def child(self, child_context: str) -> "Logger":
        """
        Create a child logger with additional context.

        Example:
            agent_logger = Logger("Agent")
            tool_logger = agent_logger.child("Tools")
            # Logs will show [Agent:Tools]
        """
        new_context = f"{self.context}:{child_context}" if self.context else child_context
        return Logger(new_context, self._min_level)

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self._min_level

    def _format_message(self, level: str, message: str, color: str) -> str:
        """
        Output format: [TIMESTAMP] [LEVEL] [context] message
        Example: [2024-01-31T10:30:00] [INFO] [Agent] Processing request...
        """
        timestamp = datetime.now().isoformat(timespec="seconds")
        context_str = f"[{self.context}] " if self.context else ""

        return (
            f"{Colors.DIM}[{timestamp}]{Colors.RESET} "
            f"{color}[{level}]{Colors.RESET} "
            f"{context_str}{message}"
        )

    def _log(
        self,
        level: LogLevel,
        level_name: str,
        color: str,
        message: str,
        data: dict[str, Any] | None = None
    ) -> None:
        if level < self._min_level:
            return

        formatted = self._format_message(level_name, message, color)

        # Errors go to stderr, everything else to stdout
        stream = sys.stderr if level >= LogLevel.ERROR else sys.stdout
        print(formatted, file=stream)

        if data:
            data_str = json.dumps(data, indent=2, default=str)
            print(f"{Colors.DIM}{data_str}{Colors.RESET}", file=stream)

    def debug(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Log a debug message. Only shown when LOG_LEVEL=DEBUG."""
        self._log(LogLevel.DEBUG, "DEBUG", Colors.DEBUG, message, data)

    def info(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Log an info message."""
        self._log(LogLevel.INFO, "INFO", Colors.INFO, message, data)

    def warning(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Log a warning message."""
        self._log(LogLevel.WARNING, "WARN", Colors.WARNING, message, data)

    def error(self, message: str, error: BaseException | None = None) -> None:
        """
        Log an error message. Always shown regardless of log level.

        When an exception is given, its type, message, the time it was logged
        and its stack trace are printed with the message.

        Args:
            message: The error message
            error: Optional exception to include details from
        """
        data = None
        if error:
            data = {
                "error_type": type(error).__name__,
                "error_message": str(error),
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "stack": "".join(
                    traceback.format_exception(type(error), error, error.__traceback__)
                ),
            }
        self._log(LogLevel.ERROR, "ERROR", Colors.ERROR, message, data)
