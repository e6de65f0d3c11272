"""structlog configuration for servicekit.

Two output modes:
- Human (default): console-rendered output to stderr
- JSON (log_json): structured JSON lines to stderr
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

from servicekit.services.faults import StructlogFaultLogger, set_default_fault_logger

if TYPE_CHECKING:
    from servicekit.config.settings import ServiceKitSettings


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
    """
    kit_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    render_processors: list[structlog.types.Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if log_json:
        render_processors.append(structlog.processors.format_exc_info)
        render_processors.append(structlog.processors.JSONRenderer())
    else:
        render_processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=render_processors,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("servicekit").setLevel(kit_level)


def configure_from_settings(settings: ServiceKitSettings) -> None:
    """Apply the logging flags and fault section of *settings*."""
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
    set_default_fault_logger(StructlogFaultLogger.from_settings(settings))
