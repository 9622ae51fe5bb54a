"""Logging configuration utilities."""

import logging
import logging.config
import logging.handlers
import json
import os
from datetime import datetime, timezone

from persuratan.core.config import settings


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def __init__(self, service_name):
        super().__init__()
        self.service_name = service_name

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry['exc_info'] = self.formatException(record.exc_info)
        if record.stack_info:
            log_entry['stack_info'] = self.formatStack(record.stack_info)

        return json.dumps(log_entry, ensure_ascii=False)


def _console_only(level: str) -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )


def build_logging_config(log_file_path: str, level: str = "INFO") -> dict:
    """Dict untuk logging.config.dictConfig: console (simple) + file (JSON, rotating)."""
    handlers = ['console', 'file']
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'json': {
                '()': 'persuratan.utils.logging.JSONFormatter',
                'service_name': settings.SERVICE_NAME,
            },
            'simple': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'level': level,
                'formatter': 'simple',
                'stream': 'ext://sys.stdout',
            },
            'file': {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': level,
                'formatter': 'json',
                'filename': log_file_path,
                'maxBytes': settings.LOG_MAX_BYTES,
                'backupCount': settings.LOG_BACKUP_COUNT,
                'encoding': 'utf-8',
            },
        },
        'loggers': {
            '': {  # Root logger
                'level': level,
                'handlers': handlers,
                'propagate': False,
            },
            'uvicorn': {
                'level': level,
                'handlers': handlers,
                'propagate': False,
            },
            'uvicorn.access': {
                'level': level,
                'handlers': handlers,
                'propagate': False,
            },
        },
    }


def setup_logging():
    """Setup application logging."""
    level = "DEBUG" if settings.DEBUG else "INFO"

    log_directory = os.path.abspath(settings.LOG_DIRECTORY)
    try:
        os.makedirs(log_directory, exist_ok=True)
    except OSError as e:
        print(f"Error with log directory {log_directory}: {e}")
        print("Falling back to console-only logging")
        _console_only(level)
        return

    log_file_path = os.path.join(log_directory, f'{settings.SERVICE_NAME}.log')

    try:
        logging.config.dictConfig(build_logging_config(log_file_path, level))
    except (ValueError, TypeError, AttributeError, ImportError) as e:
        print(f"Error setting up logging configuration: {e}")
        _console_only(level)
