"""Database models for the catering API.

These models describe the full schema used by the application. They are kept
isolated from any application wiring so that they can be used in tests or
migrations independently."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Registered customer or administrator."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(64), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    first_name = Column(String(100), nullable=False, default="")
    last_name = Column(String(100), nullable=False, default="")
    phone_number = Column(String(32), nullable=True)
    password_hash = Column(String, nullable=False)
    role = Column(String(16), nullable=False, default="customer")
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class MenuItem(Base):
    """A dish offered per serving."""

    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String(100), nullable=False, index=True)
    price_per_serving = Column(Numeric(10, 2), nullable=False)
    image_url = Column(Text, nullable=False, default="")
    is_available = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )


class Offer(Base):
    """Promotional offer shown on the public site."""

    __tablename__ = "offers"

    id = Column(Integer, primary_key=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    benefits = Column(Text, nullable=False, default="")
    image_url = Column(Text, nullable=False, default="")
    image_file_name = Column(String(255), nullable=False, default="")
    start_at = Column(DateTime(timezone=True), nullable=True)
    end_at = Column(DateTime(timezone=True), nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )


class PromoCode(Base):
    """Percentage discount code; ``code`` is stored upper-case."""

    __tablename__ = "promo_codes"

    id = Column(Integer, primary_key=True)
    code = Column(String(64), nullable=False, unique=True)
    description = Column(Text, nullable=False, default="")
    discount_percent = Column(Integer, nullable=False)
    usage_limit = Column(Integer, nullable=True)
    usage_count = Column(Integer, nullable=False, default=0)
    start_at = Column(DateTime(timezone=True), nullable=True)
    end_at = Column(DateTime(timezone=True), nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )


class Booking(Base):
    """Catering event booked for one slot of one day."""

    __tablename__ = "bookings"
    __table_args__ = (
        UniqueConstraint("event_date", "time_slot", name="uq_bookings_date_slot"),
    )

    id = Column(Integer, primary_key=True)
    booking_ref = Column(String(32), nullable=False, unique=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    customer_name = Column(String(200), nullable=False, default="")
    customer_email = Column(String(255), nullable=True)
    customer_phone = Column(String(32), nullable=True)
    occasion = Column(String(100), nullable=True)
    event_date = Column(Date, nullable=False)
    time_slot = Column(String(16), nullable=False)
    venue = Column(Text, nullable=True)
    num_guests = Column(Integer, nullable=False, default=1)
    special_instructions = Column(Text, nullable=False, default="")
    promo_code = Column(String(64), nullable=True)
    discount_percent = Column(Integer, nullable=True)
    subtotal = Column(Numeric(12, 2), nullable=False, default=0)
    discount_amount = Column(Numeric(12, 2), nullable=False, default=0)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(String(16), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    items = relationship(
        "BookingItem",
        back_populates="booking",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="BookingItem.id",
    )


class BookingItem(Base):
    """Menu line on a booking with name and price snapshots."""

    __tablename__ = "booking_items"

    id = Column(Integer, primary_key=True)
    booking_id = Column(
        Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False
    )
    menu_item_id = Column(
        Integer, ForeignKey("menu_items.id", ondelete="SET NULL"), nullable=True
    )
    name = Column(String(200), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    line_total = Column(Numeric(12, 2), nullable=False)

    booking = relationship("Booking", back_populates="items")


class Receipt(Base):
    """Billing record issued for a booking."""

    __tablename__ = "receipts"

    id = Column(Integer, primary_key=True)
    receipt_number = Column(String(32), nullable=False, unique=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False, unique=True)
    subtotal = Column(Numeric(12, 2), nullable=False)
    tax_rate = Column(Numeric(5, 4), nullable=False)
    tax_amount = Column(Numeric(12, 2), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String(64), nullable=False, default="Cash/Card")
    payment_status = Column(String(16), nullable=False, default="pending")
    issued_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class ReceiptCounter(Base):
    """Monotonic counter backing receipt numbers per series."""

    __tablename__ = "receipt_counters"

    series = Column(String(32), primary_key=True)
    current = Column(Integer, nullable=False, default=0)
