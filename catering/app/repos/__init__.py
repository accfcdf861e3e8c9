from .bookings_repo import BookingsRepo
from .menu_repo import MenuRepo
from .offers_repo import OffersRepo
from .promo_codes_repo import PromoCodesRepo
from .receipts_repo import ReceiptsRepo
from .users_repo import UsersRepo

__all__ = [
    "BookingsRepo",
    "MenuRepo",
    "OffersRepo",
    "PromoCodesRepo",
    "ReceiptsRepo",
    "UsersRepo",
]
