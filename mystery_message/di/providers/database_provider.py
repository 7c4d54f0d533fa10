from typing import TYPE_CHECKING
from ...core.config import get_settings
from ...infrastructure.db.mongo_connection import MongoConnection

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DatabaseProvider:
    """Centralized database connection provider - single source of truth for the DB handle"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the process-wide connection handle and the users collection.
        The Motor client itself is only created when the handle is first acquired.
        """
        settings = get_settings()
        connection = MongoConnection(settings.mongo_uri, settings.mongo_database_name)

        container.register_singleton(MongoConnection, connection)
        container.register_singleton("user_collection", connection.users())
