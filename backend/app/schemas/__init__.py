from .base import CamelModel, MessageResponse
from .account import (
    AccountRegister,
    AccountLogin,
    ExternalLogin,
    AccountUpdate,
    RoleUpdate,
    AccountResponse,
    AccountMessageResponse,
)
from .helper_listing import ListingCreate, ListingUpdate, ListingResponse
from .booking import BookingCreate, BookingResponse
from .review import ReviewSubmission, ReviewUpdate, ReviewResponse
from .contact import ContactCreate, ContactResponse
