"""Utilities for managing receipt counters."""

from datetime import date

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession


def build_series(today: date | None = None) -> str:
    """Return the yearly series key used in :mod:`receipt_counters`."""
    today = today or date.today()
    return f"{today:%Y}"


async def next_receipt_number(session: AsyncSession, series: str) -> str:
    """Return the next receipt number for ``series``.

    The counter row is created if missing and atomically incremented in the
    caller's transaction. Numbers are formatted as ``RCP-2025-0001``.
    """
    stmt = text(
        """
        INSERT INTO receipt_counters (series, current)
        VALUES (:series, 1)
        ON CONFLICT (series)
        DO UPDATE SET current = receipt_counters.current + 1
        RETURNING current
        """
    )
    result = await session.execute(stmt, {"series": series})
    current = result.scalar_one()
    return f"RCP-{series}-{current:04d}"
