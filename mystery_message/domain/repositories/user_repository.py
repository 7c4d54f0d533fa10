from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.message import Message
from ..models.user import User


class UserRepository(ABC):
    """Repository interface - users and their embedded messages"""

    @abstractmethod
    async def find_by_identifier(self, identifier: str) -> Optional[User]:
        """Find user whose username or email equals identifier"""
        pass

    @abstractmethod
    async def find_by_username(self, username: str, verified_only: bool = False) -> Optional[User]:
        """Find user by username, optionally only among verified users"""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find user by email address"""
        pass

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        """Find user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert a new user; raises DuplicateKeyError on username/email collision"""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Update an existing user's mutable fields; raises UserNotFoundError"""
        pass

    @abstractmethod
    async def update_acceptance(self, user_id: str, is_accepting_messages: bool) -> User:
        """Set the acceptance flag atomically; raises UserNotFoundError"""
        pass

    @abstractmethod
    async def append_message(self, user_id: str, message: Message) -> Message:
        """Append to the owner's messages; raises UserNotFoundError"""
        pass

    @abstractmethod
    async def delete_message(self, user_id: str, message_id: str) -> bool:
        """Remove one message; returns False if nothing matched"""
        pass

    @abstractmethod
    async def retrieve_messages_sorted(self, user_id: str) -> Optional[List[Message]]:
        """Messages newest first; None if the user does not exist"""
        pass
