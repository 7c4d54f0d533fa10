from .user import User
from .message import Message

__all__ = ["User", "Message"]
