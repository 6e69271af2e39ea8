"""
Structured logging for ikarbiter.

Built on structlog. Every IK and FK request runs inside ``request_context``,
which binds a short request id and the call mode into structlog's
contextvars so that per-candidate verdict lines can be tied back to the
request that produced them.

Usage::

    from ikarbiter.core.logging import configure_logging, get_logger

    configure_logging(level="DEBUG")
    logger = get_logger(__name__)
    logger.info("ik_solutions_ranked", candidates=8, valid=3)
"""

import logging
import sys
import uuid
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import structlog


def _build_renderer(json_output: bool) -> structlog.types.Processor:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """
    Route structlog and stdlib logging through one formatter.

    Call once at startup (the CLI does this for you).

    Args:
        level: Minimum log level name. Unknown names fall back to INFO.
        json_output: Emit JSON lines instead of console-friendly output.
        log_file: Optional file that receives a copy of every line.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=handlers,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _build_renderer(json_output),
        ],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named after the calling module."""
    return structlog.get_logger(name)


@contextmanager
def request_context(mode: str, **fields: Any) -> Iterator[str]:
    """
    Bind a request id and call mode for the duration of one request.

    Yields:
        The generated request id.
    """
    request_id = uuid.uuid4().hex[:8]
    with structlog.contextvars.bound_contextvars(
        request_id=request_id, mode=mode, **fields
    ):
        yield request_id
