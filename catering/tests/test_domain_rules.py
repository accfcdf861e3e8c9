from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from catering.app.domain.promotions import offer_is_live, promo_rejection
from catering.app.domain.receipts import (
    apply_percent_discount,
    compute_receipt,
    line_total,
    lines_subtotal,
)
from catering.app.domain.slots import (
    TimeSlot,
    available_slots,
    conflict_message,
    slot_label,
)
from catering.app.domain.status import BookingStatus, owner_can_set
from catering.app.utils.receipt_counter import build_series

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def _promo(**overrides):
    data = {
        "active": True,
        "start_at": None,
        "end_at": None,
        "usage_limit": None,
        "usage_count": 0,
    }
    data.update(overrides)
    return SimpleNamespace(**data)


def test_available_slots_complement():
    assert available_slots([]) == [TimeSlot.MORNING, TimeSlot.AFTERNOON]
    assert available_slots(["morning"]) == [TimeSlot.AFTERNOON]
    assert available_slots([TimeSlot.AFTERNOON, "morning"]) == []


def test_slot_labels():
    assert slot_label("morning") == "8:00 AM - 2:00 PM"
    assert slot_label(TimeSlot.AFTERNOON) == "3:00 PM - 11:00 PM"
    assert slot_label(None) == "Time not specified"
    assert slot_label("evening") == "Time not specified"


def test_conflict_message_names_slot_and_date():
    msg = conflict_message(TimeSlot.MORNING, date(2024, 6, 15))
    assert msg == "The morning time slot is already booked for 2024-06-15"


def test_receipt_math():
    amounts = compute_receipt(Decimal("1000.00"))
    assert amounts.tax_amount == Decimal("120.00")
    assert amounts.total == Decimal("1120.00")

    # Half-up rounding to cents.
    assert compute_receipt("0.05").tax_amount == Decimal("0.01")
    assert compute_receipt(0).total == Decimal("0.00")

    with pytest.raises(ValueError):
        compute_receipt("-1")


def test_line_totals_and_discount():
    assert line_total("12.50", 3) == Decimal("37.50")
    lines = [{"unit_price": "250", "quantity": 10}, {"unit_price": "99.99", "quantity": 2}]
    assert lines_subtotal(lines) == Decimal("2699.98")
    assert apply_percent_discount(Decimal("2500.00"), 10) == Decimal("250.00")
    assert apply_percent_discount(Decimal("2500.00"), None) == Decimal("0.00")


def test_promo_rejection_order():
    assert promo_rejection(_promo(), NOW) is None
    assert (
        promo_rejection(_promo(active=False, usage_limit=1, usage_count=5), NOW)
        == "Promo code is no longer active"
    )
    assert (
        promo_rejection(_promo(start_at=NOW + timedelta(days=1)), NOW)
        == "Promo code is not yet active"
    )
    assert (
        promo_rejection(_promo(end_at=NOW - timedelta(seconds=1)), NOW)
        == "Promo code has expired"
    )
    assert (
        promo_rejection(_promo(usage_limit=3, usage_count=3), NOW)
        == "Promo code usage limit reached"
    )


def test_save10_window():
    save10 = _promo(
        start_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        end_at=datetime(2024, 12, 31, tzinfo=timezone.utc),
        usage_limit=100,
        usage_count=10,
    )
    assert promo_rejection(save10, NOW) is None
    later = datetime(2025, 1, 15, tzinfo=timezone.utc)
    assert promo_rejection(save10, later) == "Promo code has expired"


def test_naive_datetimes_are_treated_as_utc():
    promo = _promo(end_at=datetime(2024, 6, 15, 11, 0))
    assert promo_rejection(promo, NOW) == "Promo code has expired"


def test_offer_window_defaults():
    assert offer_is_live(_promo(), NOW)
    assert not offer_is_live(_promo(active=False), NOW)
    assert not offer_is_live(_promo(start_at=NOW + timedelta(hours=1)), NOW)
    assert offer_is_live(_promo(end_at=NOW), NOW)
    assert offer_is_live(_promo(), datetime(2099, 12, 30, tzinfo=timezone.utc))
    assert not offer_is_live(_promo(), datetime(2100, 1, 2, tzinfo=timezone.utc))


def test_owner_may_only_cancel():
    assert owner_can_set(BookingStatus.CANCELLED)
    assert not owner_can_set(BookingStatus.CONFIRMED)
    assert not owner_can_set(BookingStatus.COMPLETED)


def test_receipt_series_is_year():
    assert build_series(date(2025, 3, 1)) == "2025"
