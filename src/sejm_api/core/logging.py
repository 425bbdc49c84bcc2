"""Loguru logging configuration.

Human-readable lines on stderr by default, or one JSON object per record
when ``json_logs`` is set (for log shippers). A rotating file sink is added
when a ``log_dir`` is provided.
"""

import sys
from pathlib import Path

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"
_LOG_FILE = "sejm-api.log"


def setup_logging(log_level: str = "INFO", log_dir: str | None = None, json_logs: bool = False) -> None:
    """Configure Loguru sinks.

    Args:
        log_level: Minimum log level to emit.
        log_dir: Optional directory for log files, rotated every 24 hours
            and retained 7 days.
        json_logs: Serialize stderr records as JSON instead of text.
    """
    level = log_level.upper()
    logger.remove()
    logger.configure(extra={"service": "sejm-api"})
    if json_logs:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=_LOG_FORMAT)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / _LOG_FILE,
            level=level,
            format=_LOG_FORMAT,
            rotation="24h",
            retention="7 days",
            encoding="utf-8",
        )
