from .errors import error_response, DomainError, NotFoundError, ValidationError, ConflictError
from .email import send_email
from .auth import normalize_email
