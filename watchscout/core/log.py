# watchscout/core/log.py
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

ROOT_LOGGER = "watchscout"


class JsonFormatter(logging.Formatter):
    """Jedna linia JSON na zdarzenie: ts (UTC), level, event, logger, potem pola kontekstu."""

    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "event": record.getMessage(),
            "logger": record.name,
        }
        fields = getattr(record, "fields", None)
        if isinstance(fields, dict):
            # pola bazowe mają pierwszeństwo
            for k, v in fields.items():
                line.setdefault(k, v)
        if record.exc_info:
            line["exc"] = self.formatException(record.exc_info)
        if record.stack_info:
            line["stack"] = self.formatStack(record.stack_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def setup_json_logger(level: str = "INFO", stream: IO[str] | None = None) -> logging.Logger:
    """
    Podpina pod logger 'watchscout' jeden handler z JsonFormatter.
    Domyślnie pisze na bieżący sys.stdout; kolejne wywołanie zastępuje handler.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(JsonFormatter())
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
    return logger


class ContextLogger(logging.LoggerAdapter):
    """
    Adapter ze stałym kontekstem. Pola z bind()/get_logger(**ctx) trafiają do
    każdej linii, extra={...} z pojedynczego wywołania je nadpisuje:
        log = get_logger("watchscout.offers").bind(path="/us/movie/dune")
        log.info("locale_done", extra={"locale": "en_US"})
    """

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        fields = dict(self.extra or {})
        fields.update(kwargs.pop("extra", None) or {})
        kwargs["extra"] = {"fields": fields}
        return msg, kwargs

    def bind(self, **context: Any) -> ContextLogger:
        return ContextLogger(self.logger, {**(self.extra or {}), **context})


def get_logger(name: str = ROOT_LOGGER, **context: Any) -> ContextLogger:
    base = logging.getLogger(ROOT_LOGGER)
    if not base.handlers:
        setup_json_logger()
    # childy oddają rekordy do handlera 'watchscout'
    logger = base if name == ROOT_LOGGER else logging.getLogger(name)
    return ContextLogger(logger, context)
