"""Dual-format logging system for the ESP toolchain check.

Provides colored console output for humans and, when a log directory is
given, JSON logs for machine consumption.
"""

import json
import logging
import re
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any


class ColoredFormatter(logging.Formatter):
    """Terminal formatter with ANSI colors.

    Color mapping:
    - DEBUG: Cyan
    - INFO: Green
    - WARNING: Yellow
    - ERROR: Red
    - CRITICAL: Magenta
    """

    # ANSI color codes
    COLORS = {
        logging.DEBUG: "\033[36m",  # Cyan
        logging.INFO: "\033[32m",  # Green
        logging.WARNING: "\033[33m",  # Yellow
        logging.ERROR: "\033[31m",  # Red
        logging.CRITICAL: "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, fmt: str | None = None, datefmt: str | None = None, use_colors: bool = True):
        """Initialize colored formatter.

        Args:
            fmt: Log message format string.
            datefmt: Date format string.
            use_colors: Enable colored output.
        """
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with optional colors.

        The record itself is left untouched so other handlers see the
        plain level name.
        """
        if not self.use_colors:
            return super().format(record)

        levelname = record.levelname
        level_color = self.COLORS.get(record.levelno, "")
        record.levelname = f"{level_color}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logs.

    Produces newline-delimited JSON (JSONL). Each entry includes
    timestamp, level, logger, message, and a context dict built from
    the extra fields of the log call.
    """

    # Control characters to remove (all except \n, \r, \t)
    _CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

    _STANDARD_ATTRS = frozenset(
        {
            "name",
            "msg",
            "args",
            "levelname",
            "levelno",
            "pathname",
            "filename",
            "module",
            "lineno",
            "funcName",
            "created",
            "msecs",
            "relativeCreated",
            "thread",
            "threadName",
            "processName",
            "process",
            "taskName",
            "exc_info",
            "exc_text",
            "stack_info",
            "asctime",
            "message",
        }
    )

    @staticmethod
    def _sanitize_string(value: Any) -> Any:
        """Remove control characters from strings, recursing into containers."""
        if isinstance(value, str):
            return JSONFormatter._CONTROL_CHARS_PATTERN.sub("", value)
        elif isinstance(value, (list, tuple)):
            return type(value)(JSONFormatter._sanitize_string(v) for v in value)
        elif isinstance(value, dict):
            return {k: JSONFormatter._sanitize_string(v) for k, v in value.items()}
        return value

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": logging.getLevelName(record.levelno),
            "logger": record.name,
            "message": self._sanitize_string(record.getMessage()),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self._sanitize_string(self.formatException(record.exc_info))

        context = {
            key: self._sanitize_string(value)
            for key, value in record.__dict__.items()
            if key not in self._STANDARD_ATTRS and not key.startswith("_")
        }
        if context:
            log_entry["context"] = context

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ToolcheckLogger:
    """Dual-format logger with colored console and optional JSON file output.

    Console output goes to stderr so it never mixes with the report on
    stdout. File handlers are only installed when log_dir is given.

    Example:
        logger = get_logger("esp_toolcheck", console_level=logging.DEBUG)

        logger.debug("Querying GitHub API", url=url)
        logger.error("Invalid GitHub token")
    """

    FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

    def __init__(
        self,
        name: str,
        log_dir: Path | None = None,
        console_enabled: bool = True,
        console_level: int = logging.INFO,
        max_file_size: int = 10_000_000,  # 10MB
        backup_count: int = 5,
    ):
        """Initialize dual-format logger.

        Args:
            name: Logger name.
            log_dir: Directory for log files, None to disable file logging.
            console_enabled: Enable colored console output.
            console_level: Minimum level printed on the console.
            max_file_size: Maximum size of each log file before rotation.
            backup_count: Number of backup files to keep.
        """
        self.name = name
        self.log_dir = Path(log_dir) if log_dir is not None else None
        self.console_enabled = console_enabled
        self.console_level = console_level

        self._logger = logging.getLogger(name)
        self._logger.setLevel(logging.DEBUG)
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

        if console_enabled:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(console_level)
            console_handler.setFormatter(
                ColoredFormatter(
                    fmt=self.FORMAT,
                    datefmt=self.DATE_FORMAT,
                    use_colors=sys.stderr.isatty(),
                )
            )
            self._logger.addHandler(console_handler)

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

            # JSONL structured log
            json_handler = RotatingFileHandler(
                self.log_dir / f"{name}.jsonl",
                maxBytes=max_file_size,
                backupCount=backup_count,
                encoding="utf-8",
            )
            json_handler.setLevel(logging.DEBUG)
            json_handler.setFormatter(JSONFormatter())
            self._logger.addHandler(json_handler)

            # Human-readable log
            text_handler = RotatingFileHandler(
                self.log_dir / f"{name}.log",
                maxBytes=max_file_size,
                backupCount=backup_count,
                encoding="utf-8",
            )
            text_handler.setLevel(logging.INFO)
            text_handler.setFormatter(logging.Formatter(fmt=self.FORMAT, datefmt=self.DATE_FORMAT))
            self._logger.addHandler(text_handler)

    def debug(self, message: str, **context) -> None:
        """Log DEBUG message with optional context."""
        self._logger.debug(message, extra=context)

    def info(self, message: str, **context) -> None:
        """Log INFO message with optional context."""
        self._logger.info(message, extra=context)

    def warning(self, message: str, **context) -> None:
        """Log WARNING message with optional context."""
        self._logger.warning(message, extra=context)

    def error(self, message: str, exception: Exception | None = None, **context) -> None:
        """Log ERROR message with optional exception and context.

        Args:
            message: Log message.
            exception: Exception object (will include stack trace).
            **context: Additional metadata for JSON logs.
        """
        if exception:
            self._logger.error(
                message,
                exc_info=(type(exception), exception, exception.__traceback__),
                extra=context,
            )
        else:
            self._logger.error(message, extra=context)

    def log_tool_call(
        self,
        tool_name: str,
        args: dict,
        result: str,
        duration: float,
        success: bool,
    ) -> None:
        """Structured logging for MCP tool execution.

        Args:
            tool_name: Name of the tool that was called.
            args: Arguments passed to the tool.
            result: Result/output from the tool.
            duration: Execution duration in seconds.
            success: Whether the tool execution succeeded.
        """
        level = logging.INFO if success else logging.ERROR
        status = "SUCCESS" if success else "FAILED"

        self._logger.log(
            level,
            f"Tool {status}: {tool_name} ({duration:.2f}s)",
            extra={
                "tool_name": tool_name,
                "tool_args": args,
                "tool_result": result[:500] if result else "",  # Truncate long results
                "duration_seconds": duration,
                "success": success,
                "event_type": "tool_call",
            },
        )

    @property
    def logger(self) -> logging.Logger:
        """Get the underlying Python logger."""
        return self._logger
