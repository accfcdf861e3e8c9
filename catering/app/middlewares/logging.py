import json
import logging
import os
import random
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# Body and query fields never written to logs
SECRET_KEYS = {"password", "new_password", "token", "access_token", "authorization"}
LOG_SAMPLE_2XX = float(os.getenv("LOG_SAMPLE_2XX", "1.0"))

logger = logging.getLogger("api")


def _redact(obj):
    if isinstance(obj, dict):
        return {
            k: ("***" if k.lower() in SECRET_KEYS else _redact(v))
            for k, v in obj.items()
        }
    if isinstance(obj, list):
        return [_redact(v) for v in obj]
    return obj


class LoggingMiddleware(BaseHTTPMiddleware):
    """Emit one structured record per request with latency and status."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        dur_ms = int((time.perf_counter() - start) * 1000)
        status = response.status_code

        if 200 <= status < 300 and random.random() >= LOG_SAMPLE_2XX:
            return response

        summary = {
            "method": request.method,
            "path": request.url.path,
            "ip": request.client.host if request.client else None,
        }
        query = dict(request.query_params)
        if query:
            summary["query"] = _redact(query)
        extra = {
            "route": request.url.path,
            "status": status,
            "latency_ms": dur_ms,
            "user": getattr(request.state, "user_id", None),
        }
        log_fn = logger.error if status >= 500 else logger.info
        log_fn(json.dumps(summary), extra=extra)
        return response
