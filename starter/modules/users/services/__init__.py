"""
Services
"""

from .mail_service import MailRequest, SmtpMailService
from .passwords import hash_password, verify_password
from .tokens import EmailTokenService

__all__ = [
    "MailRequest",
    "SmtpMailService",
    "hash_password",
    "verify_password",
    "EmailTokenService",
]
