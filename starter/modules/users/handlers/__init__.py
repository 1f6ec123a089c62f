"""
Command / Query Handlers

Plain async handlers. They are wrapped with their interceptors in
starter.modules.users.operations.
"""

from .confirm_email import ConfirmEmailCommandHandler
from .get_user import GetUserByUsernameQueryHandler
from .sign_up import SignUpCommandHandler

__all__ = [
    "ConfirmEmailCommandHandler",
    "GetUserByUsernameQueryHandler",
    "SignUpCommandHandler",
]
