"""Structured logging for swapcache.

Everything is emitted through stdlib loggers under ``swapcache``, which only
carries a ``NullHandler`` until the application opts in. Host applications
that already configure logging see swapcache events as ordinary records with
the event fields attached as ``extra`` attributes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from swapcache_core.config.settings import CacheSettings

LOGGER_NAME = "swapcache"
_HANDLER_NAME = "swapcache-stream"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())

_BOUND_PROCESSORS: list[structlog.types.Processor] = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.render_to_log_kwargs,
]


def get_logger(component: str) -> Any:  # noqa: ANN401
    """Return a structlog logger writing to ``swapcache.<component>``.

    Does not depend on the global structlog configuration.
    """
    return structlog.wrap_logger(
        logging.getLogger(f"{LOGGER_NAME}.{component}"),
        processors=_BOUND_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def configure_logging(settings: CacheSettings) -> logging.Handler:
    """Attach a console or JSON stream handler to the ``swapcache`` logger.

    Only the ``swapcache`` hierarchy is touched; root logging and the global
    structlog configuration are left to the application. Calling it again
    replaces the handler installed by the previous call.
    """
    if settings.log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.ExtraAdder(),
            structlog.processors.TimeStamper(fmt="iso"),
        ],
    )

    package_logger = logging.getLogger(LOGGER_NAME)
    for existing in package_logger.handlers[:]:
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)
    package_logger.addHandler(handler)
    package_logger.setLevel(_resolve_level(settings.log_level))
    package_logger.propagate = False
    return handler


def _resolve_level(level_name: str) -> int:
    """Convert a level name string to a logging level int."""
    mapping: dict[str, int] = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(level_name.upper(), logging.INFO)
