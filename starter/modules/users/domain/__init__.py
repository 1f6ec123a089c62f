"""
Domain Models
"""

from .user import ApplicationUser, Roles
from .models import ConfirmEmailRequest, SignUpRequest, SignUpResponse, UserResponse
from .results import DataResult

__all__ = [
    "ApplicationUser",
    "Roles",
    "ConfirmEmailRequest",
    "SignUpRequest",
    "SignUpResponse",
    "UserResponse",
    "DataResult",
]
