"""
➡️ But : Configurer les logs structurés (structlog au-dessus du logging standard).

setup_logging() : console colorée en dev, JSON en prod ; les logs d'uvicorn passent
par le même rendu.

get_logger(__name__) : logger clé/valeur utilisé par tous les modules.

set_feed_session_context() : chaque événement journalisé pendant une requête de feed
porte la session et l'appareil concernés (feed_session, device_id).
"""

import logging
import sys
from contextvars import ContextVar
from typing import Optional, Tuple

import structlog

# (session_id, device_id) de la requête de feed en cours
current_feed_context: ContextVar[Optional[Tuple[str, Optional[str]]]] = ContextVar(
    "current_feed_context", default=None
)

_QUIET_LOGGERS = ("botocore", "boto3", "urllib3.connectionpool", "sqlalchemy.engine")
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def add_feed_context(_logger, _method_name, event_dict):
    """Processor structlog : ajoute feed_session / device_id si une session est en cours."""
    context = current_feed_context.get()
    if context is not None:
        session_id, device_id = context
        event_dict.setdefault("feed_session", session_id)
        if device_id:
            event_dict.setdefault("device_id", device_id)
    return event_dict


def setup_logging(log_level: str = "INFO", json_output: bool = False) -> None:
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_feed_context,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        # traces d'exception sérialisées dans le champ "exception"
        final_processors = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        final_processors = [structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            # logs émis directement par stdlib (uvicorn, sqlalchemy...) : mêmes champs
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *final_processors],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for name in _UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def set_feed_session_context(session_id: str, device_id: Optional[str] = None) -> None:
    current_feed_context.set((session_id, device_id))
