"""JSON log records for loader and cache events.

Callers log a mapping such as ``{"event": "object_thawed", "name": "fit"}``.
The adapter adds the logger name, a UTC timestamp and the context bound via
:func:`get_logger`, renders the result as the JSON message and keeps the
dict on the record as ``record.structured``.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from .errors import ProjkitError, plain_context


class StructuredLoggerAdapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: Any):  # type: ignore[override]
        payload = dict(msg) if isinstance(msg, Mapping) else {"message": str(msg)}
        context = {**(self.extra or {}), **payload.pop("context", {})}
        if context:
            payload["context"] = plain_context(context)
        payload.setdefault("logger", self.logger.name)
        payload.setdefault("timestamp", datetime.now(timezone.utc).isoformat(timespec="milliseconds"))
        kwargs.setdefault("extra", {})["structured"] = payload
        return json.dumps(payload, default=str), kwargs


def get_logger(name: str, **context: Any) -> StructuredLoggerAdapter:
    """Return an adapter for ``name``; ``context`` is attached to every record."""

    base_logger = logging.getLogger(name)
    if base_logger.level == logging.NOTSET:
        base_logger.setLevel(logging.INFO)
    return StructuredLoggerAdapter(base_logger, context)


def log_exception(logger: StructuredLoggerAdapter, error: ProjkitError, *, event: str) -> None:
    """Log ``error`` at ERROR level as ``{"event": event, "error": {...}}``."""

    logger.error({"event": event, "error": error.to_dict()})


__all__ = ["StructuredLoggerAdapter", "get_logger", "log_exception"]
