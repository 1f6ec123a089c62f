"""
Sign-Up Command Handler

Creates a user, assigns the handler's role (creating the role on first use)
and sends the verification email. Cross-cutting behavior (transaction,
validation, error logging) is attached by the aspect table in
starter.modules.users.operations, not here.
"""
import logging
import os
from typing import Optional
from urllib.parse import urlencode

from starter.core import settings
from starter.modules.users import messages
from starter.modules.users.domain import ApplicationUser, DataResult, Roles, SignUpRequest, SignUpResponse
from starter.modules.users.repositories import UserRepository
from starter.modules.users.services import EmailTokenService, MailRequest, SmtpMailService, hash_password

logger = logging.getLogger("starter.users.sign_up")

TEMPLATE_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))),
    "templates",
    "verification_email.html",
)
CONFIRM_EMAIL_PATH = "api/account/confirm-email"


class SignUpCommandHandler:

    def __init__(
        self,
        repository: UserRepository,
        mail_service: SmtpMailService,
        token_service: EmailTokenService,
        role: Roles = Roles.USER,
        base_url: Optional[str] = None,
        template_path: str = TEMPLATE_PATH,
    ):
        self.repository = repository
        self.mail_service = mail_service
        self.token_service = token_service
        self.role = role
        self.base_url = base_url or settings.BASE_URL
        self.template_path = template_path

    async def handle(self, request: SignUpRequest) -> DataResult[SignUpResponse]:
        logger.debug(f"[SignUpCommandHandler.handle] username={request.username}, role={self.role.value}")

        if await self.repository.find_by_username(request.username):
            return DataResult.error(messages.USERNAME_ALREADY_EXIST)
        if await self.repository.find_by_email(request.email):
            return DataResult.error(messages.EMAIL_ALREADY_EXIST)

        user_id = await self.repository.create(
            username=request.username,
            email=request.email,
            first_name=request.first_name,
            last_name=request.last_name,
            password_hash=hash_password(request.password),
        )

        if not await self.repository.role_exists(self.role.value):
            await self.repository.create_role(self.role.value)
        await self.repository.add_to_role(user_id, self.role.value)

        user_data = await self.repository.find_by_id(user_id)
        if not user_data:
            return DataResult.error(f"{messages.SIGN_UP_FAILED}:{messages.USER_NOT_FOUND}")
        user = ApplicationUser.from_dict(user_data, roles=[self.role.value])

        verification_uri = await self.send_verification_email(user)
        logger.info(f"[SignUpCommandHandler.handle] User created: {user.id} ({self.role.value})")
        return DataResult.ok(
            SignUpResponse(id=user.id, email=user.email, username=user.username),
            messages.SIGN_UP_SUCCESSFULLY + verification_uri,
        )

    def build_verification_url(self, user: ApplicationUser) -> str:
        query = urlencode({
            "userId": user.id,
            "verificationToken": self.token_service.generate(user.id, user.email),
        })
        return f"{self.base_url}{CONFIRM_EMAIL_PATH}?{query}"

    async def send_verification_email(self, user: ApplicationUser) -> str:
        """Send the verification email and return the verification url."""
        verification_url = self.build_verification_url(user)

        with open(self.template_path, "r", encoding="utf-8") as f:
            template = f.read()

        await self.mail_service.send_email(MailRequest(
            to_email=user.email,
            subject="Please verify your email",
            body=template.replace("[verificationUrl]", verification_url),
        ))
        return verification_url
