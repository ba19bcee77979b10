import logging
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
import os
import json
from datetime import datetime, timezone
from functools import wraps
import traceback

from school_directory.core.config import get_logging_config


class CustomJsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging"""
    def __init__(self, **kwargs):
        super().__init__()
        self.kwargs = kwargs

    def format(self, record):
        json_record = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        if hasattr(record, 'request_id'):
            json_record['request_id'] = record.request_id

        if record.exc_info:
            json_record['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': traceback.format_exception(*record.exc_info)
            }

        if hasattr(record, 'duration'):
            json_record['duration_ms'] = record.duration

        if self.kwargs.get('extra_fields'):
            for field in self.kwargs['extra_fields']:
                if hasattr(record, field):
                    json_record[field] = getattr(record, field)

        return json.dumps(json_record)


class AccessRecordFilter(logging.Filter):
    """Passes only the per-request records written by the request middleware"""
    def __init__(self, exclude: bool = False):
        super().__init__()
        self.exclude = exclude

    def filter(self, record):
        is_access = hasattr(record, 'status_code')
        return not is_access if self.exclude else is_access


class LoggerFactory:
    """Factory class for creating and configuring loggers"""

    @staticmethod
    def create_logger(name: str, log_dir: str = None, level: str = "DEBUG"):
        if log_dir is None:
            log_dir = os.path.join(os.getcwd(), 'logs')

        os.makedirs(log_dir, exist_ok=True)

        log_files = {
            'app': os.path.join(log_dir, 'app.log'),
            'error': os.path.join(log_dir, 'error.log'),
            'access': os.path.join(log_dir, 'access.log'),
        }

        logger = logging.getLogger(name)
        logger.setLevel(getattr(logging, level))

        # Remove existing handlers if any
        if logger.handlers:
            logger.handlers.clear()

        handlers = {
            'app': RotatingFileHandler(
                log_files['app'],
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5
            ),
            'error': RotatingFileHandler(
                log_files['error'],
                maxBytes=10 * 1024 * 1024,
                backupCount=5
            ),
            'access': TimedRotatingFileHandler(
                log_files['access'],
                when='midnight',
                interval=1,
                backupCount=30
            ),
            'console': logging.StreamHandler()
        }

        for handler_name, handler in handlers.items():
            if handler_name == 'error':
                handler.setLevel(logging.ERROR)
            else:
                handler.setLevel(getattr(logging, level))

            # JSON for files, plain text for the console
            if isinstance(handler, (RotatingFileHandler, TimedRotatingFileHandler)):
                handler.setFormatter(CustomJsonFormatter(
                    extra_fields=['request_id', 'method', 'path', 'status_code']
                ))
            else:
                handler.setFormatter(logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
                ))

            if handler_name == 'access':
                handler.addFilter(AccessRecordFilter())
            elif handler_name == 'app':
                handler.addFilter(AccessRecordFilter(exclude=True))

            logger.addHandler(handler)

        return logger


def log_function_call(logger):
    """Decorator to log coroutine entry, exit, and performance"""
    def decorator(func):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            start_time = datetime.now()
            func_name = func.__name__

            logger.debug(f"Entering function: {func_name}")
            try:
                result = await func(*args, **kwargs)
                duration = (datetime.now() - start_time).total_seconds() * 1000
                logger.debug(
                    f"Exiting function: {func_name}",
                    extra={'duration': duration}
                )
                return result
            except Exception:
                logger.error(f"Error in function: {func_name}", exc_info=True)
                raise

        return async_wrapper
    return decorator


# Create default logger instance
_logging_config = get_logging_config()
logger = LoggerFactory.create_logger(
    "SchoolDirectoryLogger",
    log_dir=_logging_config["log_dir"],
    level=_logging_config["log_level"]
)
