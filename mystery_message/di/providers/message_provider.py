from typing import TYPE_CHECKING
from ...domain.repositories.user_repository import UserRepository
from ...infrastructure.external.groq_suggestion_service import GroqSuggestionService
from ...application.use_cases.message.acceptance import (
    GetAcceptanceStatusUseCase,
    SetAcceptanceStatusUseCase,
)
from ...application.use_cases.message.send_message import SendMessageUseCase
from ...application.use_cases.message.list_messages import ListMessagesUseCase
from ...application.use_cases.message.delete_message import DeleteMessageUseCase
from ...application.use_cases.message.suggest_messages import SuggestMessagesUseCase

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class MessageProvider:
    """Messaging use case provider - acceptance gate, intake, retrieval, suggestions"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        for use_case_class in (
            GetAcceptanceStatusUseCase,
            SetAcceptanceStatusUseCase,
            SendMessageUseCase,
            ListMessagesUseCase,
            DeleteMessageUseCase,
        ):
            container.register_factory(
                use_case_class,
                lambda cls=use_case_class: cls(user_repository=container.get(UserRepository))
            )

        container.register_factory(
            SuggestMessagesUseCase,
            lambda: SuggestMessagesUseCase(
                suggestion_service=container.get(GroqSuggestionService)
            )
        )
