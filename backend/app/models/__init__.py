from .account import Account, AccountRole
from .helper_listing import HelperListing, ListingStatus
from .booking import Booking
from .booking_status import BookingStatus
from .review import Review
from .contact_message import ContactMessage
from .sequence import Sequence

__all__ = [
    "Account",
    "AccountRole",
    "HelperListing",
    "ListingStatus",
    "Booking",
    "BookingStatus",
    "Review",
    "ContactMessage",
    "Sequence",
]
