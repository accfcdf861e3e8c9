"""Promo code administration and public validation."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from .auth import Identity, require_admin
from .deps import get_promo_codes_repo
from .domain.errors import NotFoundError, ValidationError
from .domain.promotions import promo_rejection
from .repos import PromoCodesRepo
from .schemas import (
    PromoCodeCreate,
    PromoCodeOut,
    PromoCodeUpdate,
    PromoToggle,
    PromoValidateRequest,
)
from .utils.responses import ok

router = APIRouter(prefix="/promo-codes", tags=["promo-codes"])


def _out(promo) -> dict:
    return PromoCodeOut.model_validate(promo).model_dump(mode="json")


@router.get("")
async def list_promo_codes(
    _: Identity = Depends(require_admin),
    promos: PromoCodesRepo = Depends(get_promo_codes_repo),
) -> dict:
    return ok([_out(promo) for promo in await promos.list_codes()])


@router.post("/validate")
async def validate_promo_code(
    payload: PromoValidateRequest,
    promos: PromoCodesRepo = Depends(get_promo_codes_repo),
) -> dict:
    """Check a code without redeeming it.

    Unknown codes are 404; the first failed rule (active flag, validity
    window, usage limit) is returned as a 400.
    """

    promo = await promos.find_by_code(payload.code)
    if promo is None:
        raise NotFoundError("Invalid promo code")
    reason = promo_rejection(promo)
    if reason:
        raise ValidationError(reason)
    return ok(
        {
            "code": promo.code,
            "discount_percent": promo.discount_percent,
            "description": promo.description,
        }
    )


@router.get("/{promo_id}")
async def get_promo_code(
    promo_id: int,
    _: Identity = Depends(require_admin),
    promos: PromoCodesRepo = Depends(get_promo_codes_repo),
) -> dict:
    return ok(_out(await promos.get(promo_id)))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_promo_code(
    payload: PromoCodeCreate,
    _: Identity = Depends(require_admin),
    promos: PromoCodesRepo = Depends(get_promo_codes_repo),
) -> dict:
    return ok(_out(await promos.create(payload.model_dump())))


@router.put("/{promo_id}")
async def update_promo_code(
    promo_id: int,
    payload: PromoCodeUpdate,
    _: Identity = Depends(require_admin),
    promos: PromoCodesRepo = Depends(get_promo_codes_repo),
) -> dict:
    promo = await promos.update(promo_id, payload.model_dump(exclude_unset=True))
    return ok(_out(promo))


@router.patch("/{promo_id}/toggle")
async def toggle_promo_code(
    promo_id: int,
    payload: PromoToggle,
    _: Identity = Depends(require_admin),
    promos: PromoCodesRepo = Depends(get_promo_codes_repo),
) -> dict:
    return ok(_out(await promos.set_active(promo_id, payload.active)))


@router.delete("/{promo_id}")
async def delete_promo_code(
    promo_id: int,
    _: Identity = Depends(require_admin),
    promos: PromoCodesRepo = Depends(get_promo_codes_repo),
) -> dict:
    promo = await promos.delete(promo_id)
    return ok({"id": promo.id, "deleted": True})
