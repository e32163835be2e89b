"""JSON event logging for upsert-builder.

Every module logs through ``get_logger(__name__)``, which hands out a structlog
logger rendering one JSON object per event. Handlers are attached to the
``upsert_builder`` logger only; the root logger and any handlers a host
application installed are left alone, and events still propagate to them.

Bound row values (the ``values`` / ``row_args`` carried by duplicate events)
can hold personal data, so they are replaced by ``[REDACTED]`` unless
``UPSERT_LOG_ROW_VALUES`` is enabled.

Settings read from upsert_builder.config.settings:
- LOG_LEVEL: level of the ``upsert_builder`` logger. Default: INFO
- UPSERT_LOG_TO_FILE: also write to a daily rotating file. Default: disabled
- UPSERT_LOG_FILE_DIR: directory for that file. Default: logs/
- UPSERT_LOG_ROW_VALUES: keep bound row values in events. Default: disabled

Usage:
    >>> from upsert_builder.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("upsert.statement.built", table="person", rows=3)
"""

import logging
import sys
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, MutableMapping

import structlog
from structlog.types import EventDict, Processor

from upsert_builder.config import get_settings

PACKAGE_LOGGER = "upsert_builder"

ROW_VALUE_KEYS = frozenset({"values", "row_args"})

REDACTED_VALUE = "[REDACTED]"


def sanitize_for_logging(data: Dict[str, Any], keep_row_values: bool = False) -> Dict[str, Any]:
    """Replace bound row values in an event dictionary.

    Example:
        >>> sanitize_for_logging({"signature": "1001", "values": ["1001", "Tom"]})
        {'signature': '1001', 'values': '[REDACTED]'}
    """
    if keep_row_values:
        return dict(data)
    return {key: REDACTED_VALUE if key in ROW_VALUE_KEYS else value for key, value in data.items()}


def sanitization_processor(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    return sanitize_for_logging(dict(event_dict), keep_row_values=get_settings().log_row_values)


def _get_log_file_path() -> Path:
    log_dir = Path(get_settings().log_file_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    # Format: upsert-builder-YYYYMMDD.log
    date_str = datetime.now().strftime("%Y%m%d")
    return log_dir / f"upsert-builder-{date_str}.log"


def _configure_structlog() -> None:
    settings = get_settings()
    level = getattr(logging, settings.LOG_LEVEL, logging.INFO)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    formatter = logging.Formatter("%(message)s")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.log_to_file:
        handlers.append(
            TimedRotatingFileHandler(
                filename=str(_get_log_file_path()),
                when="midnight",
                interval=1,
                backupCount=30,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        sanitization_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Configure structlog on module import
_configure_structlog()


def get_logger(name: str) -> Any:
    """Get a structlog logger for ``name`` (normally the caller's ``__name__``)."""
    return structlog.get_logger(name)
