"""
Logging Configuration Module

Provides centralized logging configuration with file and console handlers.
"""

import functools
import inspect
import json
import logging
import os
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from .settings import LogConfig

# Define log format strings
FILE_FORMATTER = '%(asctime)s.%(msecs)03d | %(levelname)-7s | [PID:%(process)d/TID:%(thread)d] | %(filename)s.%(funcName)s:%(lineno)d | %(message)s'
CONSOLE_FORMATTER = '%(asctime)s.%(msecs)03d | \033[1m%(levelname)-7s\033[0m | %(name)s:%(lineno)d | \033[36m%(message)s\033[0m'


class LoggingConfig:
    """Logging configuration management"""

    def __init__(self, log_file_name=None, log_level=None, backup_count=None, log_dir=None):
        self.log_file_name = log_file_name or LogConfig.FILE_NAME
        self.log_level = log_level or logging.getLevelName(str(LogConfig.LEVEL).upper())
        self.backup_count = backup_count if backup_count is not None else LogConfig.BACKUP_COUNT
        self.log_dir = log_dir or LogConfig.LOG_DIR
        self.logger = logging.getLogger()

    def setup_logging(self):
        """Setup logging with file and console handlers"""
        # Clear existing handlers to avoid duplicates
        self.logger.handlers.clear()
        self.logger.setLevel(self.log_level)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMATTER))
        self.logger.addHandler(console_handler)

        if self.log_dir is None:
            self.log_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "../../logs")

        try:
            os.makedirs(self.log_dir, exist_ok=True)
        except OSError as e:
            self.logger.error(f"Failed to create log directory {self.log_dir}: {e}")
            return self.logger

        # Daily rotation
        file_handler = TimedRotatingFileHandler(
            os.path.join(self.log_dir, f'{self.log_file_name}.log'),
            when='D',
            interval=1,
            backupCount=self.backup_count,
            encoding='utf-8',
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMATTER))
        self.logger.addHandler(file_handler)

        # Uvicorn installs its own handlers; route them through ours
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
            logging.getLogger(name).handlers.clear()
            logging.getLogger(name).propagate = True

        self.logger.info("Logging initialized successfully")
        return self.logger


class _SafeEncoder(json.JSONEncoder):
    def default(self, o):
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        if isinstance(o, Path):
            return str(o)
        if is_dataclass(o) and not isinstance(o, type):
            return asdict(o)
        if hasattr(o, 'model_dump') and callable(o.model_dump):
            return o.model_dump()
        if isinstance(o, set):
            return sorted(o)
        return f"<{type(o).__name__}>"


def _safe_to_json(obj, max_length=500):
    """Safely render a value for the call log, truncated to max_length"""
    try:
        if obj is None or isinstance(obj, (bool, int, float, str)):
            result = str(obj)
            return result if len(result) <= max_length else result[:max_length] + "..."

        json_str = json.dumps(obj, cls=_SafeEncoder, ensure_ascii=False)
        if len(json_str) > max_length:
            return json_str[:max_length] + "... (truncated)"
        return json_str
    except (TypeError, ValueError):
        result = repr(obj)
        return result[:max_length] + "..." if len(result) > max_length else result


def log_print(func):
    """Decorator for logging function calls and return values (supports sync/async)"""

    try:
        param_names = list(inspect.signature(func).parameters.keys())
    except (TypeError, ValueError):
        param_names = []

    logger = logging.getLogger(func.__module__)

    def _format_args(args, kwargs):
        # Skip self
        start_idx = 1 if param_names and param_names[0] in ("self", "cls") else 0
        params = []
        for i, arg in enumerate(args[start_idx:]):
            param_idx = start_idx + i
            if param_idx < len(param_names):
                params.append(f"{param_names[param_idx]}={arg!r}")
            else:
                params.append(f"{arg!r}")
        params.extend(f"{k}={v!r}" for k, v in kwargs.items())
        return ', '.join(params) if params else '(no args)'

    @functools.wraps(func)
    async def async_wrapper(*args, **kwargs):
        logger.info(f"[Call] {func.__qualname__} ←------------ Args: {_format_args(args, kwargs)}")
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            logger.error(f"[Exception] {func.__qualname__} ! {e.__class__.__name__}: {e}")
            raise
        logger.info(f"[Return] {func.__qualname__} ------------→ Result: {_safe_to_json(result)}")
        return result

    @functools.wraps(func)
    def sync_wrapper(*args, **kwargs):
        logger.info(f"[Call] {func.__qualname__} ←------------ Args: {_format_args(args, kwargs)}")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"[Exception] {func.__qualname__} ! {e.__class__.__name__}: {e}")
            raise
        logger.info(f"[Return] {func.__qualname__} ------------→ Result: {_safe_to_json(result)}")
        return result

    return async_wrapper if inspect.iscoroutinefunction(func) else sync_wrapper
