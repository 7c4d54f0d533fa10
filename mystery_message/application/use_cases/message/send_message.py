# Local application imports
from ....domain.exceptions import NotAcceptingMessagesError, UserNotFoundError
from ....domain.models.message import Message
from ....domain.repositories.user_repository import UserRepository
from ....utils.datetime_utils import utc_now
from ...dto.message_dto import MessageResponse, SendMessageRequest


class SendMessageUseCase:
    """Use case for an anonymous sender depositing a message on a profile"""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, request: SendMessageRequest) -> MessageResponse:
        """
        Append a message to a verified user's inbox if they accept messages

        Args:
            request: Target username and message content

        Returns:
            MessageResponse for the stored message

        Raises:
            UserNotFoundError: If no verified user has the username
            NotAcceptingMessagesError: If the user has turned messages off
        """
        user = await self.user_repository.find_by_username(request.username, verified_only=True)
        if user is None:
            raise UserNotFoundError()

        if not user.is_accepting_messages:
            raise NotAcceptingMessagesError()

        message = await self.user_repository.append_message(
            user.id or "",
            Message(id=None, content=request.content, created_at=utc_now()),
        )
        return MessageResponse(
            id=message.id or "",
            content=message.content,
            created_at=message.created_at,
        )
