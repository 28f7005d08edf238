"""Application logging configuration utilities."""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

from pagecite.config.settings import AppSettings


class MinimalJSONFormatter(logging.Formatter):
    """Serialize log records to a compact JSON string."""

    # attributes every LogRecord carries; anything else came in via ``extra``
    _RESERVED_KEYS = frozenset(
        logging.LogRecord("", 0, "", 0, "", (), None).__dict__
    ) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - inherited
        timestamp = (
            datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z")
        )

        log_record: dict[str, Any] = {
            "ts": timestamp,
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in self._RESERVED_KEYS or key.startswith("_"):
                continue
            log_record[key] = value

        return json.dumps(log_record, ensure_ascii=False, default=str)


def configure_logging(settings: AppSettings | None = None) -> None:
    """Configure application logging (JSON lines by default) on stderr."""

    settings = settings or AppSettings()
    formatter = "json" if settings.log_format == "json" else "plain"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {"()": MinimalJSONFormatter},
                "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter,
                },
            },
            "root": {
                "level": "WARNING",
                "handlers": ["default"],
            },
            "loggers": {
                "pagecite": {"level": settings.log_level},
                # request bodies of the OpenAI client are noisy at INFO
                "httpx": {"level": "WARNING"},
            },
        }
    )
