"""Structured logging for mastery_trace.

Library modules obtain loggers with get_logger and never configure
anything themselves. Records go through the standard library logger of
the same name, so the host application's levels and handlers decide
what is emitted; with no logging configured, debug and info events are
dropped.

Applications that want the library's own console or JSON rendering opt
in explicitly:

    from mastery_trace.logging import configure_logging

    configure_logging(config.log_level, json_output=config.log_json)
"""

import logging
import sys
from typing import IO, Any

import structlog

__all__ = [
    "LIBRARY_LOGGER_NAME",
    "configure_logging",
    "get_logger",
    "resolve_level",
]

LIBRARY_LOGGER_NAME = "mastery_trace"

# Marks the handler installed by configure_logging so reconfiguring replaces it
_HANDLER_ATTR = "_mastery_trace_handler"


def resolve_level(level: int | str) -> int:
    """Convert a level name or number to a logging level.

    Args:
        level: Level as an int or a name such as "debug" or "WARNING"

    Returns:
        Numeric logging level

    Raises:
        ValueError: If the name is not a known logging level
    """
    if isinstance(level, int):
        return level
    levels = logging.getLevelNamesMapping()
    name = level.strip().upper()
    if name not in levels:
        raise ValueError(
            f"Unknown log level {level!r}; expected one of {', '.join(sorted(levels))}"
        )
    return levels[name]


def configure_logging(
    level: int | str = logging.INFO,
    json_output: bool = False,
    add_timestamp: bool = True,
    stream: IO[str] | None = None,
) -> None:
    """Opt in to the library's structlog rendering.

    Configures structlog's processor chain and attaches one stream
    handler to the "mastery_trace" logger. The root logger is left
    alone. Calling again replaces the previous handler.

    Args:
        level: Level for the library's loggers (default: INFO)
        json_output: If True, output JSON; if False, pretty console output
        add_timestamp: If True, add ISO timestamp to log entries
        stream: Destination stream (default: stdout)

    Raises:
        ValueError: If level is an unknown level name
    """
    numeric_level = resolve_level(level)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    for handler in list(library_logger.handlers):
        if getattr(handler, _HANDLER_ATTR, False):
            library_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(handler, _HANDLER_ATTR, True)
    library_logger.addHandler(handler)
    library_logger.setLevel(numeric_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger backed by the standard library logger.

    Processors are resolved from the structlog configuration on first
    use, so loggers created at import time pick up whatever the host
    configures later.

    Args:
        name: Logger name (usually __name__ of the calling module)

    Returns:
        structlog BoundLogger wrapping logging.getLogger(name)
    """
    return structlog.wrap_logger(
        logging.getLogger(name or LIBRARY_LOGGER_NAME),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
