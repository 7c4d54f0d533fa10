# Standard library imports
from typing import List

# Local application imports
from ....domain.exceptions import SuggestionUnavailableError
from ....infrastructure.external.groq_suggestion_service import (
    SUGGESTION_SEPARATOR,
    GroqSuggestionService,
)


class SuggestMessagesUseCase:
    """Use case for proposing conversation starters to anonymous senders"""

    def __init__(self, suggestion_service: GroqSuggestionService) -> None:
        self.suggestion_service = suggestion_service

    async def execute(self) -> List[str]:
        """
        Returns:
            Non-empty list of suggested questions

        Raises:
            SuggestionUnavailableError: If the model is unconfigured, failed, or returned nothing usable
        """
        text = await self.suggestion_service.generate()
        if not text:
            raise SuggestionUnavailableError()

        suggestions = [
            part.strip().strip("'\"").strip()
            for part in text.split(SUGGESTION_SEPARATOR)
        ]
        suggestions = [s for s in suggestions if s]
        if not suggestions:
            raise SuggestionUnavailableError()
        return suggestions
