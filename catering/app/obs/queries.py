"""Slow statement logging for SQLAlchemy engines."""

from __future__ import annotations

import hashlib
import logging
import os
import time

from sqlalchemy import event
from sqlalchemy.engine import Engine

from ..routes_metrics import db_slow_queries_total

SLOW_QUERY_MS = int(os.getenv("DB_SLOW_QUERY_MS", "200"))
MAX_SQL_CHARS = 200

logger = logging.getLogger("obs")


def _shorten(statement: str) -> str:
    sql = " ".join(statement.split())
    if len(sql) > MAX_SQL_CHARS:
        return sql[: MAX_SQL_CHARS - 3] + "..."
    return sql


def add_query_logger(engine: Engine, label: str) -> None:
    """Warn about statements on ``engine`` slower than ``DB_SLOW_QUERY_MS``.

    Parameters are never logged; only a short hash is kept so repeated slow
    calls with the same arguments can be correlated.
    """
    target = getattr(engine, "sync_engine", engine)

    @event.listens_for(target, "before_cursor_execute")
    def _start(conn, cursor, statement, parameters, context, executemany):  # type: ignore[no-untyped-def]
        conn.info.setdefault("query_start", []).append(time.perf_counter())

    @event.listens_for(target, "after_cursor_execute")
    def _finish(conn, cursor, statement, parameters, context, executemany):  # type: ignore[no-untyped-def]
        elapsed_ms = (time.perf_counter() - conn.info["query_start"].pop()) * 1000
        if elapsed_ms <= SLOW_QUERY_MS:
            return
        db_slow_queries_total.labels(db=label).inc()
        logger.warning(
            "slow query %dms db=%s sql=%s params=%s",
            int(elapsed_ms),
            label,
            _shorten(statement),
            hashlib.sha256(repr(parameters).encode()).hexdigest()[:8],
        )
