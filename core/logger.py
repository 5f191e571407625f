"""SdkLogger: one-time setup of the ``telegram_sdk`` logger hierarchy.

SDK modules log through child loggers (``telegram_sdk.client``,
``telegram_sdk.response``, …) with structured ``extra`` fields; records
propagate here and are written as single-line JSON to stderr and, when
``TELEGRAM_SDK_LOG_FILE`` is set, to a rotating file.
"""

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Optional


class _JsonFormatter(logging.Formatter):
    """Render a record as one JSON object, ``extra`` fields merged in."""

    _BUILTIN_ATTRS: frozenset[str] = frozenset(vars(logging.LogRecord(
        name="", level=0, pathname="", lineno=0, msg="", args=(), exc_info=None,
    )))

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "func_name": record.funcName,
        }
        entry.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in self._BUILTIN_ATTRS and key not in entry
        )
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class SdkLogger:
    """Singleton owner of the ``telegram_sdk`` logger.

    The level comes from ``TELEGRAM_SDK_LOG_LEVEL`` (default ``WARNING``)
    unless one is passed on first use.
    """

    _instance: Optional["SdkLogger"] = None
    _logger: Optional[logging.Logger] = None

    LOGGER_NAME: str = "telegram_sdk"
    _LEVEL_ENV: str = "TELEGRAM_SDK_LOG_LEVEL"
    _FILE_ENV: str = "TELEGRAM_SDK_LOG_FILE"
    _MAX_BYTES: int = 5 * 1024 * 1024
    _BACKUP_COUNT: int = 5

    def __new__(cls, level: Optional[int] = None) -> "SdkLogger":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._init_logger(level)
        return cls._instance

    @classmethod
    def _resolve_level(cls, level: Optional[int]) -> int:
        if level is not None:
            return level
        name = os.environ.get(cls._LEVEL_ENV, "").strip().upper()
        resolved = logging.getLevelName(name) if name else logging.WARNING
        return resolved if isinstance(resolved, int) else logging.WARNING

    def _init_logger(self, level: Optional[int]) -> None:
        resolved = self._resolve_level(level)
        self._logger = logging.getLogger(self.LOGGER_NAME)
        self._logger.setLevel(resolved)
        if self._logger.handlers:
            return

        handlers: list[logging.Handler] = [logging.StreamHandler()]
        log_path = os.environ.get(self._FILE_ENV)
        if log_path:
            handlers.append(
                RotatingFileHandler(
                    log_path, maxBytes=self._MAX_BYTES, backupCount=self._BACKUP_COUNT, encoding="utf-8"
                )
            )

        formatter = _JsonFormatter()
        for handler in handlers:
            handler.setLevel(resolved)
            handler.setFormatter(formatter)
            self._logger.addHandler(handler)

    @staticmethod
    def get_logger(level: Optional[int] = None) -> logging.Logger:
        """Return the shared logger, creating it on first call."""
        instance = SdkLogger(level)
        assert instance._logger is not None
        return instance._logger

    def cleanup(self) -> None:
        """Flush, close and detach every handler."""
        if self._logger is None:
            return
        for handler in list(self._logger.handlers):
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)
