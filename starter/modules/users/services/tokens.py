"""
Email Confirmation Tokens

A token is an HMAC-SHA256 over the user's id and email, base64url encoded.
Changing the email invalidates outstanding tokens.
"""
import base64
import hashlib
import hmac
from typing import Optional

from starter.core import settings


class EmailTokenService:

    def __init__(self, secret: Optional[str] = None):
        self._secret = (secret or settings.EMAIL_TOKEN_SECRET).encode("utf-8")

    def generate(self, user_id: str, email: str) -> str:
        message = f"{user_id}:{email.lower()}".encode("utf-8")
        digest = hmac.new(self._secret, message, hashlib.sha256).digest()
        return base64.urlsafe_b64encode(digest).decode().rstrip("=")

    def verify(self, user_id: str, email: str, token: str) -> bool:
        if not token:
            return False
        return hmac.compare_digest(self.generate(user_id, email), token)
