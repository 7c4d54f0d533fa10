# Standard library imports
import logging
from typing import Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase, AsyncIOMotorCollection
from pymongo import ASCENDING

# Local application imports
from ...domain.constants import UserFields

logger = logging.getLogger(__name__)


USERS_COLLECTION = "users"


class MongoConnection:
    """
    Lazily-initialized MongoDB connection handle.

    The Motor client is created on the first ``acquire()``; later calls hand
    back the same database. One handle is owned by the DI container for the
    lifetime of the process and passed explicitly to repositories.
    """

    def __init__(self, uri: str, database_name: str) -> None:
        self.uri = uri
        self.database_name = database_name
        self._client: Optional[AsyncIOMotorClient] = None
        self._database: Optional[AsyncIOMotorDatabase] = None

    @property
    def is_connected(self) -> bool:
        return self._database is not None

    def acquire(self) -> AsyncIOMotorDatabase:
        """
        Get the database, creating the client on first use.

        Returns:
            MongoDB database instance
        """
        if self._database is not None:
            return self._database

        self._client = AsyncIOMotorClient(self.uri, serverSelectionTimeoutMS=10000)
        self._database = self._client[self.database_name]
        logger.info("MongoDB client created for database '%s'", self.database_name)
        return self._database

    def collection(self, name: str) -> AsyncIOMotorCollection:
        """Get a collection from the acquired database"""
        return self.acquire()[name]

    def users(self) -> AsyncIOMotorCollection:
        """
        Get users collection from MongoDB

        Returns:
            MongoDB collection for users
        """
        return self.collection(USERS_COLLECTION)

    async def ensure_indexes(self) -> None:
        """Create the unique username/email indexes (no-op when present)."""
        users = self.users()
        await users.create_index([(UserFields.USERNAME, ASCENDING)], unique=True)
        await users.create_index([(UserFields.EMAIL, ASCENDING)], unique=True)
        logger.info("Ensured unique indexes on users.username and users.email")

    def close(self) -> None:
        """Close the client; a later acquire() reconnects."""
        if self._client is not None:
            self._client.close()
            logger.info("MongoDB client closed")
        self._client = None
        self._database = None
