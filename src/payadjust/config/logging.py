"""structlog wiring for payadjust.

Package modules log through ``logging.getLogger(__name__)``. This module
renders those stdlib records, and native structlog loggers, through one
stderr handler: colored console lines by default, JSON lines with
``log_json``. Called by :func:`payadjust.composition.build_service`.
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "payadjust"


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors applied to both structlog events and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def build_formatter(*, log_json: bool = False) -> structlog.stdlib.ProcessorFormatter:
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_pre_chain(),
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the payadjust stderr handler on the root logger.

    Repeated calls replace the handler rather than stacking a new one.
    The ``payadjust`` logger runs at DEBUG when *verbose*, otherwise INFO so
    applied and rejected adjustments stay visible; everything else stays
    at WARNING.
    """
    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(build_formatter(log_json=log_json))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.INFO)
