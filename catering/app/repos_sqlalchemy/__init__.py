"""SQLAlchemy implementations of the repository contracts."""

from .bookings_repo_sql import BookingsRepoSQL
from .menu_repo_sql import MenuRepoSQL
from .offers_repo_sql import OffersRepoSQL
from .promo_codes_repo_sql import PromoCodesRepoSQL
from .receipts_repo_sql import ReceiptsRepoSQL
from .users_repo_sql import UsersRepoSQL

__all__ = [
    "BookingsRepoSQL",
    "MenuRepoSQL",
    "OffersRepoSQL",
    "PromoCodesRepoSQL",
    "ReceiptsRepoSQL",
    "UsersRepoSQL",
]
