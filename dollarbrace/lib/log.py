"""
Centralized application-specific logging using Loguru.

This module provides a function-based logging mechanism (`LOG`) that dynamically
respects the `beQuiet` flag from application settings.

Features:
- A custom `LOG` function for debug tracing of property resolution.
- Dynamic checking of the `beQuiet` flag so that the library stays silent
  when embedded in other tools.
- Consistent and customizable logging format.

Example:
    from dollarbrace.lib.log import LOG
    LOG("Resolving property: name")

Environment:
- Set `DBR_BEQUIET=False` to see resolution tracing on stderr.
"""

from loguru import logger
from typing import Any
import sys

# Create a distinct logger instance for the library
app_logger = logger.bind(app="DOLLARBRACE")

logger_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >28}</yellow>::"
    "<cyan>{function: <30}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)


def record_filter(record: dict[str, Any]) -> bool:
    """Accept only records emitted through `app_logger`."""
    return record["extra"].get("app") == "DOLLARBRACE"


# Sinks registered by the host application are never removed
sink_id: int = app_logger.add(
    sys.stderr, format=logger_format, level="DEBUG", filter=record_filter
)


def LOG(*args: Any, **kwargs: Any) -> None:
    """
    Library debug logging function.

    Checks the `beQuiet` flag in `appsettings` on every call and logs the
    message only if logging is enabled.

    :param args: Positional arguments for the log message.
    :param kwargs: Keyword arguments for additional log metadata.
    """
    from dollarbrace.config.settings import appsettings

    if not appsettings.beQuiet:
        app_logger.opt(depth=1).debug(*args, **kwargs)
