"""
Confirm Email Command Handler
"""
import logging

from starter.modules.users import messages
from starter.modules.users.domain import ApplicationUser, ConfirmEmailRequest, DataResult
from starter.modules.users.repositories import UserRepository
from starter.modules.users.services import EmailTokenService

logger = logging.getLogger("starter.users.confirm_email")


class ConfirmEmailCommandHandler:

    def __init__(self, repository: UserRepository, token_service: EmailTokenService):
        self.repository = repository
        self.token_service = token_service

    async def handle(self, request: ConfirmEmailRequest) -> DataResult[None]:
        user_data = await self.repository.find_by_id(request.user_id)
        if not user_data:
            return DataResult.error(messages.USER_NOT_FOUND)

        user = ApplicationUser.from_dict(user_data)
        if user.email_confirmed:
            return DataResult.error(messages.EMAIL_ALREADY_CONFIRMED)
        if not self.token_service.verify(user.id, user.email, request.verification_token):
            logger.warning(f"[ConfirmEmailCommandHandler.handle] invalid token for user {user.id}")
            return DataResult.error(messages.INVALID_VERIFICATION_TOKEN)

        await self.repository.confirm_email(user.id)
        logger.info(f"[ConfirmEmailCommandHandler.handle] Email confirmed for user {user.id}")
        return DataResult.ok(message=messages.EMAIL_CONFIRMED)
