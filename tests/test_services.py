"""
Tests for password hashing, email tokens and the SMTP mail service.
"""
from unittest.mock import MagicMock, patch

import pytest

from starter.modules.users.services import EmailTokenService, MailRequest, SmtpMailService, hash_password, verify_password


def test_password_hash_round_trip():
    encoded = hash_password("Secret123", iterations=1000)
    assert encoded.startswith("pbkdf2_sha256$1000$")
    assert verify_password("Secret123", encoded)
    assert not verify_password("secret123", encoded)


def test_same_password_hashes_differently():
    assert hash_password("Secret123", iterations=1000) != hash_password("Secret123", iterations=1000)


def test_malformed_hashes_do_not_verify():
    assert not verify_password("x", "plain")
    assert not verify_password("x", "md5$1$c2FsdA==$aGFzaA==")


def test_email_tokens():
    tokens = EmailTokenService(secret="one")
    token = tokens.generate("u1", "Jdoe@Example.com")

    assert tokens.verify("u1", "jdoe@example.com", token)
    assert not tokens.verify("u2", "jdoe@example.com", token)
    assert not tokens.verify("u1", "other@example.com", token)
    assert not tokens.verify("u1", "jdoe@example.com", "")
    assert not EmailTokenService(secret="two").verify("u1", "jdoe@example.com", token)


@pytest.mark.asyncio
async def test_send_email_uses_smtp_with_login():
    service = SmtpMailService(sender="noreply@example.com", smtp_server="smtp.test", smtp_port=587, password="pw")

    with patch("starter.modules.users.services.mail_service.smtplib.SMTP") as smtp_cls:
        server = MagicMock()
        smtp_cls.return_value.__enter__.return_value = server
        await service.send_email(MailRequest("jdoe@example.com", "Hello", "<p>hi</p>"))

    smtp_cls.assert_called_once_with("smtp.test", 587)
    server.starttls.assert_called_once()
    server.login.assert_called_once_with("noreply@example.com", "pw")
    message = server.send_message.call_args.args[0]
    assert message["To"] == "jdoe@example.com"
    assert message["Subject"] == "Hello"


@pytest.mark.asyncio
async def test_send_email_failure_propagates():
    service = SmtpMailService(sender="noreply@example.com", smtp_server="smtp.test", smtp_port=25, password="")

    with patch("starter.modules.users.services.mail_service.smtplib.SMTP", side_effect=OSError("refused")):
        with pytest.raises(OSError, match="refused"):
            await service.send_email(MailRequest("jdoe@example.com", "Hello", "body"))
