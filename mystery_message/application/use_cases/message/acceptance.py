# Standard library imports
import logging

# Local application imports
from ....domain.exceptions import UserNotFoundError
from ....domain.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class GetAcceptanceStatusUseCase:
    """Use case for reading whether a user currently accepts messages"""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, user_id: str) -> bool:
        """
        Raises:
            UserNotFoundError: If the user vanished after authenticating
        """
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user.is_accepting_messages


class SetAcceptanceStatusUseCase:
    """Use case for overwriting a user's acceptance flag (last write wins)"""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, user_id: str, accept_messages: bool) -> bool:
        """
        Args:
            user_id: Authenticated owner's ID
            accept_messages: Desired state supplied by the caller

        Returns:
            The flag as stored

        Raises:
            UserNotFoundError: If the user does not exist
        """
        updated_user = await self.user_repository.update_acceptance(user_id, accept_messages)
        logger.info("User %s is_accepting_messages=%s", user_id, updated_user.is_accepting_messages)
        return updated_user.is_accepting_messages
