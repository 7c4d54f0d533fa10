from .acceptance import GetAcceptanceStatusUseCase, SetAcceptanceStatusUseCase
from .send_message import SendMessageUseCase
from .list_messages import ListMessagesUseCase
from .delete_message import DeleteMessageUseCase
from .suggest_messages import SuggestMessagesUseCase

__all__ = [
    "GetAcceptanceStatusUseCase",
    "SetAcceptanceStatusUseCase",
    "SendMessageUseCase",
    "ListMessagesUseCase",
    "DeleteMessageUseCase",
    "SuggestMessagesUseCase",
]
