# src/mm_weather/core/logging_config.py
import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y/%m/%d %H:%M:%S"

_installed: list[logging.Handler] = []


class _BelowErrorFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.ERROR


def setup_logging(debug: bool = False) -> None:
    """Configure the root logger: INFO and below on stdout, ERROR and above on stderr.

    DEBUG records are only emitted when ``debug`` is set (the ``-debug`` flag).
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(_BelowErrorFilter())
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.ERROR)
    stderr_handler.setFormatter(formatter)

    # reconfiguring replaces the pair installed last time, other handlers stay
    while _installed:
        logger.removeHandler(_installed.pop())
    for handler in (stdout_handler, stderr_handler):
        logger.addHandler(handler)
        _installed.append(handler)

    # httpx logs every outbound request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging.debug("🔧 Debug logging enabled")
