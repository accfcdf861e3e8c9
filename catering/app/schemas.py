"""Request and response models shared by the routers."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
    model_validator,
)

from .domain.promotions import as_utc
from .domain.slots import TimeSlot
from .domain.status import BookingStatus, PaymentStatus, Role

Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class _In(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


class _Out(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class _Window(_In):
    """Optional validity window; values are normalised to UTC."""

    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None

    @field_validator("start_at", "end_at")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @model_validator(mode="after")
    def _ordered(self):
        if self.start_at and self.end_at and self.end_at < self.start_at:
            raise ValueError("end_at must not be before start_at")
        return self


def _present(value):
    if value is None:
        raise ValueError("must not be null")
    return value


class _WindowOut(_Out):
    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("start_at", "end_at", "created_at", "updated_at")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


# Auth


class RegisterRequest(_In):
    username: str = Field(..., min_length=3, max_length=64)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=1)
    first_name: str = ""
    last_name: str = ""
    phone_number: Optional[str] = None


class LoginRequest(_In):
    """Login with either e-mail or username."""

    login: str = Field(..., min_length=1, examples=["alice@example.com"])
    password: str = Field(..., min_length=1)


class PasswordCheckRequest(BaseModel):
    password: str


class UserOut(_Out):
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None
    role: Role


# Menu


class MenuItemCreate(_In):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    category: str = Field(..., min_length=1, max_length=100)
    price_per_serving: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    image_url: str = ""
    is_available: bool = True


class MenuItemUpdate(_In):
    """Partial update; only fields present in the request are applied."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    price_per_serving: Optional[Decimal] = Field(
        default=None, ge=0, max_digits=10, decimal_places=2
    )
    image_url: Optional[str] = None
    is_available: Optional[bool] = None

    @field_validator(
        "name", "description", "category", "price_per_serving", "image_url", "is_available"
    )
    @classmethod
    def _not_null(cls, value):
        return _present(value)


class MenuItemOut(_Out):
    id: int
    name: str
    description: str
    category: str
    price_per_serving: Money
    image_url: str
    is_available: bool


# Offers


class OfferCreate(_Window):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    benefits: str = ""
    image_url: str = ""
    image_file_name: str = ""
    active: bool = True


class OfferUpdate(_Window):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    benefits: Optional[str] = None
    image_url: Optional[str] = None
    image_file_name: Optional[str] = None
    active: Optional[bool] = None

    @field_validator(
        "title", "description", "benefits", "image_url", "image_file_name", "active"
    )
    @classmethod
    def _not_null(cls, value):
        return _present(value)


class OfferOut(_WindowOut):
    id: int
    title: str
    description: str
    benefits: str
    image_url: str
    image_file_name: str
    active: bool


# Promo codes


class PromoCodeCreate(_Window):
    code: str = Field(..., min_length=1, max_length=64)
    discount_percent: int = Field(..., ge=1, le=100)
    description: str = ""
    usage_limit: Optional[int] = Field(default=None, ge=1)
    active: bool = True


class PromoCodeUpdate(_Window):
    code: Optional[str] = Field(default=None, min_length=1, max_length=64)
    discount_percent: Optional[int] = Field(default=None, ge=1, le=100)
    description: Optional[str] = None
    usage_limit: Optional[int] = Field(default=None, ge=1)
    usage_count: Optional[int] = Field(default=None, ge=0)
    active: Optional[bool] = None

    @field_validator("code", "discount_percent", "description", "usage_count", "active")
    @classmethod
    def _not_null(cls, value):
        return _present(value)


class PromoToggle(BaseModel):
    active: bool


class PromoValidateRequest(_In):
    code: str = Field(..., min_length=1)


class PromoCodeOut(_WindowOut):
    id: int
    code: str
    description: str
    discount_percent: int
    usage_limit: Optional[int] = None
    usage_count: int
    active: bool


# Bookings


class BookingLineIn(BaseModel):
    menu_item_id: int
    quantity: int = Field(..., ge=1)


class BookingCreate(_In):
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    occasion: Optional[str] = None
    event_date: date
    time_slot: TimeSlot
    venue: Optional[str] = None
    num_guests: int = Field(default=1, ge=1)
    special_instructions: str = ""
    promo_code: Optional[str] = None
    items: list[BookingLineIn] = Field(..., min_length=1)


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class BookingItemOut(_Out):
    id: int
    menu_item_id: Optional[int] = None
    name: str
    quantity: int
    unit_price: Money
    line_total: Money


class BookingOut(_Out):
    id: int
    booking_ref: str
    user_id: int
    customer_name: str
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    occasion: Optional[str] = None
    event_date: date
    time_slot: TimeSlot
    venue: Optional[str] = None
    num_guests: int
    special_instructions: str
    promo_code: Optional[str] = None
    discount_percent: Optional[int] = None
    subtotal: Money
    discount_amount: Money
    total_amount: Money
    status: BookingStatus
    items: list[BookingItemOut] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Receipts


class ReceiptGenerate(_In):
    booking_id: int
    payment_method: str = Field(default="Cash/Card", min_length=1, max_length=64)
    payment_status: PaymentStatus = PaymentStatus.PENDING


class PaymentStatusUpdate(BaseModel):
    payment_status: PaymentStatus


class ReceiptOut(_Out):
    id: int
    receipt_number: str
    booking_id: int
    subtotal: Money
    tax_rate: Money
    tax_amount: Money
    total_amount: Money
    payment_method: str
    payment_status: PaymentStatus
    issued_date: date
