"""Logger adaptor; forwards to loguru with a per-module bound name."""

import sys
from typing import Any, Optional

from loguru import logger as _loguru_logger

from storage_sdk.constants import LOG_LEVEL, SERVICE_NAME

_loggers: dict = {}

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[logger_name]}</cyan> - <level>{message}</level>"
)


class StorageLogger:
    """Minimal logger that forwards to loguru. Same .info/.error/.warning/.debug/.exception API."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._log = _loguru_logger.bind(logger_name=name)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.info(msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.error(msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.warning(msg, *args, **kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.debug(msg, *args, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.exception(msg, *args, **kwargs)


def get_logger(name: Optional[str] = None) -> StorageLogger:
    if name is None:
        name = SERVICE_NAME
    if name not in _loggers:
        _loggers[name] = StorageLogger(name)
    return _loggers[name]


def add_log_sink(sink: Any = sys.stderr, level: str = LOG_LEVEL) -> int:
    """
    Add a sink that receives storage-sdk records only.

    Existing loguru handlers are left in place; the host application owns the
    global loguru configuration.

    Args:
        sink (Any): Any loguru sink. Defaults to stderr.
        level (str): Minimum level. Defaults to LOG_LEVEL.

    Returns:
        int: Handler id, for loguru's logger.remove().
    """
    return _loguru_logger.add(
        sink,
        level=level,
        format=LOG_FORMAT,
        filter=lambda record: "logger_name" in record["extra"],
    )


default_logger = get_logger()
