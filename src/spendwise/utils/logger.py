"""Logging infrastructure with request context."""
import logging
import sys
from contextvars import ContextVar, Token
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from spendwise.config.settings import get_settings

_request_id: ContextVar[Optional[str]] = ContextVar("spendwise_request_id", default=None)


class RequestContextFilter(logging.Filter):
    """Add request context to log records."""

    def filter(self, record):
        """Add request_id to record."""
        record.request_id = _request_id.get() or "system"
        return True


class SpendwiseLogger:
    """Centralized logging manager."""

    def __init__(self, log_level: Optional[str] = None):
        settings = get_settings()
        log_level = log_level or settings.log_level

        self.log_dir = Path(settings.logs_dir).expanduser()
        self.log_file = self.log_dir / settings.log_file
        self.request_filter = RequestContextFilter()

        self.logger = logging.getLogger("spendwise")
        self.logger.setLevel(getattr(logging, log_level.upper()))
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [request:%(request_id)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(self.request_filter)
        self.logger.addHandler(console_handler)

        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                self.log_file,
                maxBytes=settings.log_max_file_size_mb * 1024 * 1024,
                backupCount=settings.log_backup_count,
                encoding="utf-8"
            )
        except OSError as e:
            self.logger.warning(f"File logging disabled, cannot write to {self.log_dir}: {e}")
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            file_handler.addFilter(self.request_filter)
            self.logger.addHandler(file_handler)

    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[SpendwiseLogger] = None


def get_logger(log_level: Optional[str] = None) -> logging.Logger:
    """Get or create global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = SpendwiseLogger(log_level)
    return _logger_instance.get_logger()


def set_request_context(request_id: Optional[str]) -> Token:
    """Set the request id stamped on log records for the current context."""
    return _request_id.set(request_id)


def reset_request_context(token: Token) -> None:
    """Restore the request id that was active before set_request_context."""
    _request_id.reset(token)
