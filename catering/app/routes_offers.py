"""Promotional offer routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from .auth import Identity, require_admin
from .deps import get_offers_repo
from .domain.promotions import utcnow
from .repos import OffersRepo
from .schemas import OfferCreate, OfferOut, OfferUpdate
from .utils.responses import ok

router = APIRouter(prefix="/offers", tags=["offers"])


def _out(offer) -> dict:
    return OfferOut.model_validate(offer).model_dump(mode="json")


@router.get("")
async def list_offers(offers: OffersRepo = Depends(get_offers_repo)) -> dict:
    return ok([_out(offer) for offer in await offers.list_offers()])


@router.get("/active")
async def list_active_offers(offers: OffersRepo = Depends(get_offers_repo)) -> dict:
    """Return offers that are active and inside their validity window now."""

    return ok([_out(offer) for offer in await offers.list_active()])


@router.get("/{offer_id}")
async def get_offer(offer_id: int, offers: OffersRepo = Depends(get_offers_repo)) -> dict:
    return ok(_out(await offers.get(offer_id)))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_offer(
    payload: OfferCreate,
    _: Identity = Depends(require_admin),
    offers: OffersRepo = Depends(get_offers_repo),
) -> dict:
    fields = payload.model_dump()
    if fields["start_at"] is None:
        fields["start_at"] = utcnow()
    return ok(_out(await offers.create(fields)))


@router.put("/{offer_id}")
async def update_offer(
    offer_id: int,
    payload: OfferUpdate,
    _: Identity = Depends(require_admin),
    offers: OffersRepo = Depends(get_offers_repo),
) -> dict:
    offer = await offers.update(offer_id, payload.model_dump(exclude_unset=True))
    return ok(_out(offer))


@router.delete("/{offer_id}")
async def delete_offer(
    offer_id: int,
    _: Identity = Depends(require_admin),
    offers: OffersRepo = Depends(get_offers_repo),
) -> dict:
    offer = await offers.delete(offer_id)
    return ok({"id": offer.id, "deleted": True})
