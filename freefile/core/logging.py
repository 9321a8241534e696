"""Structured logging configuration using structlog."""

import logging
import sys
from contextvars import ContextVar
from decimal import Decimal
from typing import Any

import orjson
import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from freefile.core.config import settings

# Set per HTTP request by RequestContextMiddleware
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)

# The middleware already emits one line per request
_QUIET_LOGGERS = ("uvicorn.access",)


def _add_request_id(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Attach the active request id, if any, to the event."""
    if request_id := request_id_ctx.get():
        event_dict["request_id"] = request_id
    return event_dict


def _json_default(obj: Any) -> Any:
    """Encode values orjson has no native support for.

    Amounts are logged as their exact decimal string; sets (state lists,
    schedule codes) become sorted lists.

    Raises:
        TypeError: For any other unsupported type.
    """
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def _orjson_serializer(obj: Any, **kwargs: Any) -> str:
    return orjson.dumps(obj, default=_json_default).decode("utf-8")


def use_json_logs() -> bool:
    """Whether log lines should be rendered as JSON.

    An explicit ``LOG_FORMAT`` wins; otherwise every environment except
    development logs JSON.
    """
    if settings.log_format:
        return settings.log_format.lower() == "json"
    return settings.environment != "development"


def configure_logging() -> None:
    """Configure structlog and route stdlib logging to stdout.

    Call once at startup, before the first log line.
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _add_request_id,
    ]

    if use_json_logs():
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.EventRenamer("message"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(serializer=_orjson_serializer),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if settings.debug else logging.INFO,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, usually with ``__name__``."""
    return structlog.get_logger(name)
