# Standard library imports
import logging

# Local application imports
from ....domain.exceptions import MessageNotFoundError
from ....domain.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class DeleteMessageUseCase:
    """Use case for the owner removing one received message"""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, user_id: str, message_id: str) -> None:
        """
        Raises:
            MessageNotFoundError: If the owner has no such message (including already deleted)
        """
        deleted = await self.user_repository.delete_message(user_id, message_id)
        if not deleted:
            raise MessageNotFoundError()
        logger.info("User %s deleted message %s", user_id, message_id)
