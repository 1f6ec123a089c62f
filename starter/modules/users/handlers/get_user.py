"""
Get User By Username Query Handler
"""
from starter.modules.users import messages
from starter.modules.users.domain import ApplicationUser, DataResult, UserResponse
from starter.modules.users.repositories import UserRepository


class GetUserByUsernameQueryHandler:

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def handle(self, username: str) -> DataResult[UserResponse]:
        user_data = await self.repository.find_by_username(username)
        if not user_data:
            return DataResult.error(messages.USER_NOT_FOUND)

        roles = await self.repository.get_roles(user_data["id"])
        user = ApplicationUser.from_dict(user_data, roles=roles)
        return DataResult.ok(UserResponse(
            id=user.id,
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            roles=user.roles,
            is_verified=user.email_confirmed,
        ))
