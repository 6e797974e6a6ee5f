"""
Structured logging setup using structlog.

Every chatstore module logs through ``structlog.get_logger()`` and binds its
own component; this module only wires structlog into the stdlib handlers
once per process, from a ConfigManager's ``[logging]`` section.
"""
import logging
import sys
from typing import Optional

import structlog

from chatstore.core.config import ConfigManager

# pymongo logs heartbeats, commands and server selection on these loggers
DRIVER_LOGGERS = (
    "pymongo",
    "pymongo.command",
    "pymongo.connection",
    "pymongo.serverSelection",
    "pymongo.topology",
)


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[str] = None,
    driver_level: str = "WARNING",
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: Level for chatstore events (DEBUG shows state transitions
            and skipped migration steps).
        json_output: Render JSON lines instead of the console format.
        log_file: Also write to this file.
        driver_level: Level for pymongo's own loggers; never lower than
            ``level``.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    pymongo_level = getattr(logging, driver_level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setLevel(log_level)

    logging.basicConfig(format="%(message)s", level=log_level, handlers=handlers)

    for name in DRIVER_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, pymongo_level))

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        renderer: list[structlog.types.Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]

    structlog.configure(
        processors=shared_processors + renderer,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(config: ConfigManager) -> None:
    """Apply the ``[logging]`` section (level, json, file, driver_level)."""
    setup_logging(
        level=config.get("logging.level", "INFO"),
        json_output=config.get_bool("logging.json"),
        log_file=config.get("logging.file"),
        driver_level=config.get("logging.driver_level", "WARNING"),
    )
