# Standard library imports
from typing import List

# Local application imports
from ....domain.exceptions import UserNotFoundError
from ....domain.repositories.user_repository import UserRepository
from ...dto.message_dto import MessageResponse


class ListMessagesUseCase:
    """Use case for listing the authenticated user's messages, newest first"""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, user_id: str) -> List[MessageResponse]:
        """
        Args:
            user_id: Authenticated owner's ID

        Returns:
            Messages ordered by created_at descending; empty when there are none

        Raises:
            UserNotFoundError: If the user record is missing
        """
        messages = await self.user_repository.retrieve_messages_sorted(user_id)
        if messages is None:
            raise UserNotFoundError()

        return [
            MessageResponse(
                id=message.id or "",
                content=message.content,
                created_at=message.created_at,
            )
            for message in messages
        ]
