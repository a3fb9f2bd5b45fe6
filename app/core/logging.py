import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Optional

from app.core.context import get_actor_id, get_request_id
from app.core.settings import settings

AUDIT_LOGGER = "app.audit"
ACCESS_LOGGER = "app.access"


class RequestContextFilter(logging.Filter):
    """Stamp each record with the current request id and authenticated actor."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        record.actor = get_actor_id()
        return True


class JsonFormatter(logging.Formatter):
    def __init__(self, stream_label: str = "app") -> None:
        super().__init__()
        self.stream_label = stream_label

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - concise
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "stream": self.stream_label,
            "request_id": getattr(record, "request_id", "-"),
            "actor": getattr(record, "actor", "-"),
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _stream_handler(formatter: str, level: str) -> dict[str, Any]:
    return {
        "class": "logging.StreamHandler",
        "level": level,
        "formatter": formatter,
        "filters": ["request_context"],
        "stream": "ext://sys.stdout",
    }


def _logger(handler: str, level: str) -> dict[str, Any]:
    return {"handlers": [handler], "level": level, "propagate": False}


def configure_logging(level: Optional[str] = None) -> None:
    log_level = (level or settings.log_level).upper()
    streams = {"default": "app", "audit": "audit", "access": "access"}
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {"request_context": {"()": RequestContextFilter}},
            "formatters": {name: {"()": JsonFormatter, "stream_label": label} for name, label in streams.items()},
            "handlers": {name: _stream_handler(name, log_level) for name in streams},
            "loggers": {
                "": _logger("default", log_level),
                AUDIT_LOGGER: _logger("audit", log_level),
                ACCESS_LOGGER: _logger("access", log_level),
                "uvicorn": _logger("default", log_level),
                "uvicorn.error": _logger("default", log_level),
                # Request lines come from ACCESS_LOGGER instead
                "uvicorn.access": {"handlers": [], "level": "WARNING", "propagate": False},
            },
        }
    )
    logging.getLogger(__name__).info("Logging configured for environment=%s level=%s", settings.environment, log_level)


def get_audit_logger() -> logging.Logger:
    return logging.getLogger(AUDIT_LOGGER)


def get_access_logger() -> logging.Logger:
    return logging.getLogger(ACCESS_LOGGER)
