"""Constants for domain model field names"""

from .user_fields import UserFields
from .message_fields import MessageFields

__all__ = [
    "UserFields",
    "MessageFields",
]
