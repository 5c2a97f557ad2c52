"""Log output for reqctl, routed through structlog.

Everything is written to stderr: documents and reports go to stdout and
must stay pipeable.  ``--verbose`` opens the ``reqctl`` loggers up to DEBUG,
``--log-json`` switches the renderer from console lines to JSON objects.
Stdlib loggers (``logging.getLogger(__name__)``) and structlog loggers share
the same processor chain.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Third-party loggers that are chatty at DEBUG/INFO and never useful to a reqctl user.
QUIET_LOGGERS = ("MARKDOWN", "ruamel")

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """(Re)configure logging; safe to call more than once per process."""
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_PRE_CHAIN,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger("reqctl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
