"""Logging setup for detour.

The redirect client logs each hop through structlog. configure_logging()
points structlog AND stdlib logging at one handler, so records from
httpx (stdlib) and from detour (structlog) come out in the same format:
JSON lines, or plain console text.

URLs logged under the ``url`` and ``redirect_from`` keys have any
``user:password@`` part removed before rendering. A Location header can
carry credentials; the hop may be followed, but the credentials are
never written out.
"""

import logging
import sys
from typing import Any

import httpx
import structlog
from structlog.stdlib import ProcessorFormatter

# Loggers that report every connection and request, i.e. every redirect
# hop twice over. Held at WARNING or above.
_NOISY_LOGGERS: tuple[str, ...] = (
    "httpx",
    "httpcore",
    "httpcore.connection",
    "httpcore.http11",
    "httpcore.http2",
    "hpack",
)

_URL_FIELDS: tuple[str, ...] = ("url", "redirect_from")


def _redact_url_userinfo(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    for key in _URL_FIELDS:
        value = event_dict.get(key)
        if not isinstance(value, str) or "@" not in value:
            continue
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL:
            continue
        if url.userinfo:
            event_dict[key] = str(url.copy_with(userinfo=b""))
    return event_dict


def _remove_internal_fields(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Drop the _record/_from_structlog keys ProcessorFormatter always adds."""
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def configure_logging(*, json_output: bool = False, level: str = "INFO") -> None:
    """Route structlog and stdlib logging to a single stdout handler.

    Args:
        json_output: Render JSON lines instead of console text
        level: Root log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Typically fed from settings:
        configure_logging(json_output=settings.logging.json_output, level=settings.logging.level)
    """
    log_level = getattr(logging, level.upper())

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        _redact_url_userinfo,
    ]

    renderer: Any
    if json_output:
        renderer = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=False)]

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Tests reconfigure between cases
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(
            processors=[_remove_internal_fields, *renderer],
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    # Never less restrictive than root: at ERROR, httpx warnings stay hidden too.
    for logger_name in _NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Bound structlog logger for ``name`` (usually __name__)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
