from .database_provider import DatabaseProvider
from .repository_provider import RepositoryProvider
from .service_provider import ServiceProvider
from .auth_provider import AuthProvider
from .message_provider import MessageProvider


__all__ = [
    "DatabaseProvider",
    "RepositoryProvider",
    "ServiceProvider",
    "AuthProvider",
    "MessageProvider",
]
