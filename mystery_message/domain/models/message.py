# Standard library imports
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


MAX_MESSAGE_LENGTH = 1000


@dataclass
class Message:
    """
    Domain model for an anonymous message.

    Messages have no lifecycle of their own; they are always embedded in
    the owning User and are removed individually by that owner.
    """
    id: Optional[str]
    content: str
    created_at: datetime

    def __post_init__(self) -> None:
        """Business validations"""
        if not self.content or not self.content.strip():
            raise ValueError("Message content is required")
        if len(self.content) > MAX_MESSAGE_LENGTH:
            raise ValueError(f"Message content must be at most {MAX_MESSAGE_LENGTH} characters")
