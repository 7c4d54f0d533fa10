"""External service clients for communicating with external systems"""

from .groq_suggestion_service import GroqSuggestionService

__all__ = [
    "GroqSuggestionService",
]
