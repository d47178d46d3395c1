"""Structured JSON logging with query correlation."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from pathlib import Path
import sys
from typing import Any

import orjson

from hemolymph.observability.context import get_query_context


class JsonFormatter(logging.Formatter):
    """JSON formatter that stamps each record with the active query context.

    Every line carries the ``query_id`` plus any fields bound with
    ``bind_query``, so all log lines of one search can be grouped and read
    without the service repeating the query text in each message.
    """

    REDACT_KEYS = frozenset({"password", "token", "api_key", "secret", "authorization"})
    MAX_MESSAGE_LEN = 2000

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_query_context()
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": self._truncate(record.getMessage()),
            "logger": record.name,
            "query_id": ctx.get("query_id", ""),
        }

        # Add component from logger name
        if "." in record.name:
            log_entry["component"] = record.name.split(".")[-1]

        # Fields bound for the whole query (e.g. the raw query text)
        for key, value in ctx.items():
            if key != "query_id":
                log_entry[key] = self._redact(key, value)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Extra fields (redacted)
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_entry[key] = self._redact(key, value)

        return orjson.dumps(log_entry, default=self._json_default).decode("utf-8")

    def _truncate(self, msg: str) -> str:
        if len(msg) > self.MAX_MESSAGE_LEN:
            return msg[: self.MAX_MESSAGE_LEN] + "..."
        return msg

    def _redact(self, key: str, value: Any) -> Any:
        if key.lower() in self.REDACT_KEYS:
            return "[REDACTED]"
        if isinstance(value, str) and len(value) > 500:
            return value[:500] + "..."
        return value

    def _json_default(self, value: Any) -> Any:
        if isinstance(value, (set, frozenset)):
            try:
                return sorted(value)
            except TypeError:
                return list(value)
        if isinstance(value, Path):
            return str(value)
        if isinstance(value, (bytes, bytearray)):
            return value.decode("utf-8", errors="replace")
        if isinstance(value, Exception):
            return str(value)
        return repr(value)


_RESERVED_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    *,
    logger_levels: dict[str, str] | None = None,
) -> None:
    """Configure the root logger.

    Args:
        level: Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Emit structured JSON logs when True
        logger_levels: Per-logger level overrides (logger name -> level string)
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    root.addHandler(handler)

    for logger_name, logger_level in (logger_levels or {}).items():
        resolved = getattr(logging, logger_level.upper(), logging.INFO)
        logging.getLogger(logger_name).setLevel(resolved)
