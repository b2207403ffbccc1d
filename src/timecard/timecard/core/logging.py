from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from flask import Flask, g, request

from .constants import DEFAULT_SLOW_REQUEST_MS, SENSITIVE_FIELDS

_REQUEST_FIELDS = (
    "method",
    "path",
    "status_code",
    "latency_ms",
    "user_id",
    "query",
    "body",
    "threshold_ms",
)

request_logger = logging.getLogger("timecard.request")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in _REQUEST_FIELDS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(level: str = "INFO", *, json_output: bool = False) -> None:
    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)


def sanitize_body(body: Optional[Mapping[str, Any]]) -> Optional[dict[str, Any]]:
    """Copy of a request body with credentials redacted."""

    if not body:
        return None
    sanitized = dict(body)
    for field in SENSITIVE_FIELDS:
        if sanitized.get(field):
            sanitized[field] = "[REDACTED]"
    return sanitized


def install_request_logging(app: Flask, *, slow_request_ms: int = DEFAULT_SLOW_REQUEST_MS) -> None:
    """Log every request on completion, and warn about slow ones."""

    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.get("request_started")
        latency_ms = round((time.perf_counter() - started) * 1000, 2) if started else None

        body = None
        if request.method != "GET" and request.is_json:
            payload = request.get_json(silent=True)
            body = sanitize_body(payload) if isinstance(payload, dict) else None

        extra = {
            "method": request.method,
            "path": request.path,
            "status_code": response.status_code,
            "latency_ms": latency_ms,
            "user_id": g.get("user_id"),
            "query": dict(request.args) or None,
            "body": body,
        }

        if response.status_code >= 500:
            request_logger.error("server_error", extra=extra)
        elif response.status_code >= 400:
            request_logger.warning("client_error", extra=extra)
        else:
            request_logger.info("request", extra=extra)

        if latency_ms is not None and latency_ms > slow_request_ms:
            request_logger.warning(
                "slow_request",
                extra={**extra, "threshold_ms": slow_request_ms},
            )
        return response
