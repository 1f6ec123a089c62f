"""
Mail Service

Sends outgoing mail over SMTP. smtplib blocks, so sends run in a worker
thread.
"""
import asyncio
import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from starter.core import settings

logger = logging.getLogger("starter.mail")


@dataclass
class MailRequest:
    to_email: str
    subject: str
    body: str


class SmtpMailService:

    def __init__(
        self,
        sender: Optional[str] = None,
        smtp_server: Optional[str] = None,
        smtp_port: Optional[int] = None,
        password: Optional[str] = None,
    ):
        self.sender = sender or settings.SYSTEM_EMAIL
        self.smtp_server = smtp_server or settings.SMTP_SERVER
        self.smtp_port = smtp_port or settings.SMTP_PORT
        self.password = password if password is not None else settings.EMAIL_PASSWORD

        if not self.password:
            logger.warning("Email password not configured (EMAIL_PASSWORD or EMAIL_APP_PASSWORD). Sending without login.")

    def _build_message(self, request: MailRequest) -> MIMEMultipart:
        msg = MIMEMultipart()
        msg["From"] = self.sender
        msg["To"] = request.to_email
        msg["Subject"] = request.subject
        msg.attach(MIMEText(request.body, "html"))
        return msg

    def _send(self, request: MailRequest) -> None:
        msg = self._build_message(request)
        with smtplib.SMTP(self.smtp_server, self.smtp_port) as server:
            if self.password:
                server.starttls()
                server.login(self.sender, self.password)
            server.send_message(msg, to_addrs=[request.to_email])

    async def send_email(self, request: MailRequest) -> None:
        await asyncio.to_thread(self._send, request)
        logger.info(f"Email sent to {request.to_email}: {request.subject}")
