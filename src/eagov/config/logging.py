"""Log routing for the eagov CLI.

eagov modules log through stdlib ``logging``; telemetry logs through
structlog. Both end up in one stderr handler whose formatter is a
structlog ``ProcessorFormatter``: coloured console lines by default,
JSON lines with ``--log-json``. stdout is left to command output.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

import structlog

HANDLER_NAME = "eagov"

# Libraries that log at DEBUG on every call.
NOISY_LOGGERS = ("networkx", "ruamel")


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _render_chain(log_json: bool, stream: IO[str]) -> list[structlog.types.Processor]:
    if log_json:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=stream.isatty())]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """Install the eagov handler on the root logger.

    Args:
        verbose: ``eagov`` loggers emit DEBUG; otherwise WARNING and up.
        log_json: Render JSON lines instead of console lines.
        stream: Destination, stderr by default.

    Calling it again replaces the handler it installed earlier and
    leaves handlers owned by an embedding application alone.
    """
    stream = stream if stream is not None else sys.stderr
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_render_chain(log_json, stream),
            ],
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("eagov").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
