"""
structlog setup for TranslationFlow.

Every entry carries the app name, level and an ISO timestamp, plus any
request-scoped values bound through contextvars (``request_id``).
"""
import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import EventDict, Processor

from translationflow.config import Settings, get_settings

# Libraries whose INFO output drowns out request logs
_NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg")


def _app_context_processor(app_name: str) -> Processor:
    def add_app_name(
        logger: logging.Logger,
        method_name: str,
        event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("app", app_name)
        return event_dict

    return add_app_name


def _resolve_level(settings: Settings) -> int:
    if settings.log_level:
        level = logging.getLevelName(settings.log_level.upper())
        if isinstance(level, int):
            return level
    return logging.DEBUG if settings.debug else logging.INFO


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Renders colored console lines in debug mode and one JSON object per
    line otherwise; ``log_json`` overrides the choice. Safe to call more
    than once, the last call wins.
    """
    settings = settings or get_settings()
    level = _resolve_level(settings)
    as_json = settings.log_json if settings.log_json is not None else not settings.debug

    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _app_context_processor(settings.app_name),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if as_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """Logger bound to ``name``, typically the calling module's ``__name__``."""
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(name=name)
    return logger


def bind_context(**kwargs: Any) -> None:
    """Attach values (request_id, user_id) to every entry logged in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
