from typing import TYPE_CHECKING
from ...core.config import get_settings
from ...infrastructure.external.groq_suggestion_service import GroqSuggestionService
from ...utils.email_service import SmtpVerificationEmailSender

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class ServiceProvider:
    """External collaborator provider - email dispatch and message suggestions"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        settings = get_settings()
        container.register_singleton(
            SmtpVerificationEmailSender,
            SmtpVerificationEmailSender(settings=settings)
        )
        container.register_singleton(
            GroqSuggestionService,
            GroqSuggestionService(settings=settings)
        )
