import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from .message import Message


USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
USERNAME_MIN_LENGTH = 2
USERNAME_MAX_LENGTH = 20
VERIFY_CODE_PATTERN = re.compile(r"^\d{6}$")


@dataclass
class User:
    """Pure domain model for User entity - no external dependencies"""
    id: Optional[str]
    username: str
    email: str
    hashed_password: str
    verify_code: str
    verify_code_expiry: datetime
    is_verified: bool = False
    is_accepting_messages: bool = True
    messages: List[Message] = field(default_factory=list)

    def __post_init__(self):
        """Business validations"""
        if not self.username or not (
            USERNAME_MIN_LENGTH <= len(self.username) <= USERNAME_MAX_LENGTH
        ):
            raise ValueError("Username must be between 2 and 20 characters")
        if not USERNAME_PATTERN.match(self.username):
            raise ValueError("Username must not contain special characters")
        if not self.email or "@" not in self.email:
            raise ValueError("Invalid email format")
        if not self.hashed_password:
            raise ValueError("Password hash is required")
        if not VERIFY_CODE_PATTERN.match(self.verify_code or ""):
            raise ValueError("Verify code must be a 6-digit string")

    def is_code_expired(self, now: datetime) -> bool:
        """The code is valid only strictly before its expiry instant."""
        return now >= self.verify_code_expiry

    def code_matches(self, code: str) -> bool:
        return self.verify_code == code
