import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict
from .config import Config
from .exceptions import LoggerError

LOGGER_NAME = "stripe_rest"

CONTEXT_FIELDS = ("account", "request_id")

class ContextFilter(logging.Filter):
    """Supplies placeholder context fields for records logged without them"""

    def filter(self, record: logging.LogRecord) -> bool:
        for name in CONTEXT_FIELDS:
            if not hasattr(record, name) or getattr(record, name) is None:
                setattr(record, name, '-')
        return True

class Logger:
    _loggers: Dict[str, logging.Logger] = {}

    def __init__(self, config: Config):
        """Initialize the package logger with configuration"""
        self.config = config

        if LOGGER_NAME in self._loggers:
            self.logger = self._loggers[LOGGER_NAME]
            for handler in self.logger.handlers[:]:
                self.logger.removeHandler(handler)
                handler.close()
        else:
            self.logger = logging.getLogger(LOGGER_NAME)
            self._loggers[LOGGER_NAME] = self.logger

        level = self._get_log_level()
        self.logger.setLevel(level)

        self.formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ' - account:%(account)s - request:%(request_id)s'
        )
        self._filter = ContextFilter()

        log_file = self.config.get("logging.file")
        if log_file:
            try:
                path = Path(log_file)
                if not path.parent.exists():
                    path.parent.mkdir(parents=True, exist_ok=True)

                max_size = self.config.get("logging.max_size", 1024 * 1024)
                backup_count = self.config.get("logging.backup_count", 3)

                handler = RotatingFileHandler(
                    str(path),
                    maxBytes=max_size,
                    backupCount=backup_count
                )
                self._add_handler(handler)
            except OSError as e:
                raise LoggerError(f"Failed to setup log file: {str(e)}", details={"file": str(log_file)})

        if self.config.get("logging.console_output", False):
            self._add_handler(logging.StreamHandler())

    def _add_handler(self, handler: logging.Handler) -> None:
        handler.setFormatter(self.formatter)
        handler.addFilter(self._filter)
        self.logger.addHandler(handler)

    def _get_log_level(self) -> int:
        """Convert string log level to logging constant"""
        level_name = str(self.config.get("logging.level", "INFO")).upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise LoggerError(f"Invalid log level: {level_name}")
        return level

    def _prepare_extra(self, extra: Dict[str, Any] = None) -> Dict[str, Any]:
        extra_context = {name: '-' for name in CONTEXT_FIELDS}
        if extra:
            extra_context.update(extra)
        return extra_context

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message"""
        self.logger.debug(message, extra=self._prepare_extra(kwargs.get('extra')))

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message"""
        self.logger.info(message, extra=self._prepare_extra(kwargs.get('extra')))

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message"""
        self.logger.warning(message, extra=self._prepare_extra(kwargs.get('extra')))

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message"""
        self.logger.error(message, extra=self._prepare_extra(kwargs.get('extra')))
