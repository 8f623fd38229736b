"""Structured logging for Session Digest.

Every module logger comes from ``get_logger`` so that records share the
``session_digest`` logger namespace and the processor chain set up by
``configure_logging``. Output always goes to stderr: stdout is reserved for
the rendered digest.
"""

import logging
import sys
import time
from contextlib import contextmanager
from typing import Optional

import structlog

ROOT_LOGGER = "session_digest"


def _processors(include_timestamp: bool, json_format: bool) -> list:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]
    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    processors += [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    include_timestamp: bool = True,
) -> None:
    """Route structlog through stdlib logging on stderr.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        json_format: Emit one JSON object per record instead of console lines
        include_timestamp: Prefix records with an ISO timestamp
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper()),
        force=True,
    )

    structlog.configure(
        processors=_processors(include_timestamp, json_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None, **context) -> structlog.BoundLogger:
    """Return a logger under the ``session_digest`` namespace.

    Module names that already start with the package name are used as-is;
    anything else is nested below it.
    """
    if not name:
        name = ROOT_LOGGER
    elif name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"

    logger = structlog.get_logger(name)
    if context:
        logger = logger.bind(**context)
    return logger


class LogContext:
    """Bind context variables (recording path, session id) for a block.

    Usage:
        with LogContext(session_id="rec-123"):
            summarizer.summarize(events)
    """

    def __init__(self, **context):
        self.context = context

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        structlog.contextvars.unbind_contextvars(*self.context.keys())


@contextmanager
def log_operation(
    operation: str,
    logger: Optional[structlog.BoundLogger] = None,
    **context,
):
    """Log the start, outcome and duration of an operation.

    The yielded dict records ``success``, ``error`` and ``elapsed_ms``; callers
    may add their own result fields, which are logged on completion.

    Example:
        with log_operation("summarize", event_count=len(events)) as op:
            nodes = summarizer.summarize(events)
            op["node_count"] = len(nodes)
    """
    log = (logger or get_logger()).bind(operation=operation, **context)
    log.debug(f"{operation} started")

    result = {"success": False, "error": None, "elapsed_ms": 0}
    started = time.perf_counter()
    try:
        yield result
        result["success"] = True
    except Exception as e:
        result["error"] = str(e)
        raise
    finally:
        result["elapsed_ms"] = round((time.perf_counter() - started) * 1000, 3)
        if result["success"]:
            log.info(f"{operation} completed", **result)
        else:
            log.error(f"{operation} failed", **result)
