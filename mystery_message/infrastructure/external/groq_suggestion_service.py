"""Groq chat-completions client that proposes conversation starters."""
import logging
from typing import Any, Optional

import httpx

from ...core.config import Settings, get_settings
from ..http_client_factory import get_shared_http_client

logger = logging.getLogger(__name__)


SUGGESTION_SEPARATOR = "||"

SUGGESTION_PROMPT = (
    "Create a list of three open-ended and engaging questions formatted as a single string. "
    "Each question should be separated by '||'. These questions are for an anonymous social "
    "messaging platform, like Qooh.me, and should be suitable for a diverse audience. Avoid "
    "personal or sensitive topics, focusing instead on universal themes that encourage friendly "
    "interaction. For example, your output should be structured like this: "
    "'What's a hobby you've recently started?||If you could have dinner with any historical "
    "figure, who would it be?||What's a simple thing that makes you happy?'. Ensure the "
    "questions are intriguing, foster curiosity, and contribute to a positive and welcoming "
    "conversational environment."
)


def _extract_content(result: Any) -> str:
    """Pull choices[0].message.content out of a chat-completions body; "" if the shape is off."""
    if not isinstance(result, dict):
        return ""
    choices = result.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return ""
    message = choices[0].get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content if isinstance(content, str) else ""


class GroqSuggestionService:
    """
    Asks Groq's OpenAI-compatible chat API for message suggestions.

    Returns the raw model text; splitting into individual questions is the
    caller's job.
    """

    GROQ_CHAT_URL = "https://api.groq.com/openai/v1/chat/completions"

    # Timeout for API calls (seconds)
    API_TIMEOUT = 30.0

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._http_client = http_client

        if not self.settings.groq_api_key:
            logger.warning("GROQ_API_KEY not found in environment variables")

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = get_shared_http_client()
        return self._http_client

    @property
    def is_configured(self) -> bool:
        return bool(self.settings.groq_api_key)

    async def generate(self, prompt: str = SUGGESTION_PROMPT, max_tokens: int = 400) -> Optional[str]:
        """
        Run one chat completion.

        Args:
            prompt: User prompt sent to the model
            max_tokens: Maximum tokens in response

        Returns:
            Model text, or None when the API is not configured or the call failed
        """
        if not self.is_configured:
            logger.error("GROQ_API_KEY not configured")
            return None

        headers = {
            "Authorization": f"Bearer {self.settings.groq_api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.settings.suggestion_model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.settings.suggestion_temperature,
            "max_tokens": max_tokens,
        }

        logger.debug("Calling Groq chat API with model: %s", self.settings.suggestion_model)
        try:
            response = await self.http_client.post(
                self.GROQ_CHAT_URL,
                headers=headers,
                json=payload,
                timeout=self.API_TIMEOUT,
            )
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Groq API returned %s: %s", e.response.status_code, e.response.text[:200])
            return None
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error calling Groq API: %s", e)
            return None

        content = _extract_content(result)
        if not content:
            logger.warning("Empty response from Groq chat API")
            return None
        return content
