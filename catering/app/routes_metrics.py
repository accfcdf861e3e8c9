# routes_metrics.py

"""Prometheus metrics and /metrics endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest

# Counters
http_requests_total = Counter(
    "http_requests_total", "Total HTTP requests", ["path", "method", "status"]
)

bookings_created_total = Counter("bookings_created_total", "Total bookings created")
bookings_created_total.inc(0)

booking_conflicts_total = Counter(
    "booking_conflicts_total", "Total booking requests rejected for a taken slot"
)
booking_conflicts_total.inc(0)

promo_redemptions_total = Counter(
    "promo_redemptions_total", "Total promo code uses recorded on bookings"
)
promo_redemptions_total.inc(0)

receipts_generated_total = Counter(
    "receipts_generated_total", "Total receipts generated"
)
receipts_generated_total.inc(0)

receipt_pdfs_rendered_total = Counter(
    "receipt_pdfs_rendered_total", "Total receipt documents rendered", ["mimetype"]
)

db_slow_queries_total = Counter(
    "db_slow_queries_total", "Statements slower than DB_SLOW_QUERY_MS", ["db"]
)

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Expose Prometheus metrics in text format."""

    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
