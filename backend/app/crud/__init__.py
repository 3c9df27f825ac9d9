from .crud_account import account
from .crud_helper_listing import helper_listing
from .crud_booking import booking
from .crud_review import review
from . import crud_contact
from . import crud_sequence
