# Standard library imports
from typing import List, Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError, PyMongoError
from bson import ObjectId
from bson.errors import InvalidId

# Local application imports
from ...domain.repositories.user_repository import UserRepository
from ...domain.models.user import User
from ...domain.models.message import Message
from ...domain.constants import UserFields, MessageFields
from ...domain.exceptions import DuplicateKeyError, UserNotFoundError
from ...utils.datetime_utils import ensure_utc


def _to_object_id(value: str) -> Optional[ObjectId]:
    if not value:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, ValueError, TypeError):
        return None


class MongoUserRepository(UserRepository):
    """MongoDB implementation of UserRepository (messages embedded in the user document)"""

    def __init__(self, user_collection: AsyncIOMotorCollection) -> None:
        self.user_collection = user_collection

    async def find_by_identifier(self, identifier: str) -> Optional[User]:
        """
        Find user whose email or username equals the identifier

        Args:
            identifier: Email address or username

        Returns:
            User domain model if found, None otherwise
        """
        if not identifier:
            return None

        return await self._find_one({
            "$or": [
                {UserFields.EMAIL: identifier},
                {UserFields.USERNAME: identifier},
            ]
        })

    async def find_by_username(self, username: str, verified_only: bool = False) -> Optional[User]:
        if not username:
            return None

        query = {UserFields.USERNAME: username}
        if verified_only:
            query[UserFields.IS_VERIFIED] = True
        return await self._find_one(query)

    async def find_by_email(self, email: str) -> Optional[User]:
        if not email:
            return None
        return await self._find_one({UserFields.EMAIL: email})

    async def find_by_id(self, user_id: str) -> Optional[User]:
        object_id = _to_object_id(user_id)
        if object_id is None:
            return None
        return await self._find_one({UserFields.MONGO_ID: object_id})

    async def create(self, user: User) -> User:
        """
        Insert a new user document

        Args:
            user: User domain model without an ID

        Returns:
            Saved User domain model with ID set

        Raises:
            DuplicateKeyError: If the username or email index rejects the insert
        """
        if not user:
            raise ValueError("User cannot be None")

        user_dict = self._user_to_dict(user)
        user_dict[UserFields.MESSAGES] = [self._message_to_dict(m) for m in user.messages]

        try:
            result = await self.user_collection.insert_one(user_dict)
            new_document = await self.user_collection.find_one({UserFields.MONGO_ID: result.inserted_id})
        except MongoDuplicateKeyError:
            raise DuplicateKeyError()
        except PyMongoError as e:
            raise RuntimeError(f"Error creating user: {str(e)}")

        if new_document is None:
            raise RuntimeError("User was created but could not be retrieved")
        return self._document_to_user(new_document)

    async def save(self, user: User) -> User:
        """
        Update an existing user's fields (messages are left untouched)

        Args:
            user: User domain model with ID

        Returns:
            Updated User domain model
        """
        object_id = _to_object_id(user.id) if user else None
        if object_id is None:
            raise UserNotFoundError()

        try:
            updated_document = await self.user_collection.find_one_and_update(
                {UserFields.MONGO_ID: object_id},
                {"$set": self._user_to_dict(user)},
                return_document=ReturnDocument.AFTER,
            )
        except MongoDuplicateKeyError:
            raise DuplicateKeyError()
        except PyMongoError as e:
            raise RuntimeError(f"Error saving user: {str(e)}")

        if updated_document is None:
            raise UserNotFoundError()
        return self._document_to_user(updated_document)

    async def update_acceptance(self, user_id: str, is_accepting_messages: bool) -> User:
        object_id = _to_object_id(user_id)
        if object_id is None:
            raise UserNotFoundError()

        try:
            updated_document = await self.user_collection.find_one_and_update(
                {UserFields.MONGO_ID: object_id},
                {"$set": {UserFields.IS_ACCEPTING_MESSAGES: bool(is_accepting_messages)}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise RuntimeError(f"Error updating message acceptance: {str(e)}")

        if updated_document is None:
            raise UserNotFoundError()
        return self._document_to_user(updated_document)

    async def append_message(self, user_id: str, message: Message) -> Message:
        object_id = _to_object_id(user_id)
        if object_id is None:
            raise UserNotFoundError()

        message_dict = self._message_to_dict(message)
        try:
            update_result = await self.user_collection.update_one(
                {UserFields.MONGO_ID: object_id},
                {"$push": {UserFields.MESSAGES: message_dict}},
            )
        except PyMongoError as e:
            raise RuntimeError(f"Error appending message: {str(e)}")

        if update_result.matched_count == 0:
            raise UserNotFoundError()
        return self._document_to_message(message_dict)

    async def delete_message(self, user_id: str, message_id: str) -> bool:
        user_object_id = _to_object_id(user_id)
        message_object_id = _to_object_id(message_id)
        if user_object_id is None or message_object_id is None:
            return False

        try:
            update_result = await self.user_collection.update_one(
                {UserFields.MONGO_ID: user_object_id},
                {"$pull": {UserFields.MESSAGES: {MessageFields.MONGO_ID: message_object_id}}},
            )
        except PyMongoError as e:
            raise RuntimeError(f"Error deleting message: {str(e)}")

        return update_result.modified_count > 0

    async def retrieve_messages_sorted(self, user_id: str) -> Optional[List[Message]]:
        """
        Get a user's messages, newest first

        Unwinds the embedded array, sorts by createdAt descending (message id
        breaks ties) and regroups it.

        Args:
            user_id: Owner's user ID

        Returns:
            List of messages (possibly empty), or None if the user does not exist
        """
        object_id = _to_object_id(user_id)
        if object_id is None:
            return None

        messages_path = f"${UserFields.MESSAGES}"
        created_at = f"{UserFields.MESSAGES}.{MessageFields.CREATED_AT}"
        message_id = f"{UserFields.MESSAGES}.{MessageFields.MONGO_ID}"
        pipeline = [
            {"$match": {UserFields.MONGO_ID: object_id}},
            {"$unwind": messages_path},
            {"$sort": {created_at: -1, message_id: -1}},
            {"$group": {
                UserFields.MONGO_ID: f"${UserFields.MONGO_ID}",
                UserFields.MESSAGES: {"$push": messages_path},
            }},
        ]

        try:
            documents = await self.user_collection.aggregate(pipeline).to_list(length=None)
            if not documents:
                # $unwind drops users with no messages; tell those apart from missing users
                owner = await self.user_collection.find_one(
                    {UserFields.MONGO_ID: object_id},
                    {UserFields.MONGO_ID: 1},
                )
                return [] if owner is not None else None
        except PyMongoError as e:
            raise RuntimeError(f"Error retrieving messages: {str(e)}")

        return [
            self._document_to_message(document)
            for document in documents[0].get(UserFields.MESSAGES, [])
        ]

    async def _find_one(self, query: dict) -> Optional[User]:
        try:
            document = await self.user_collection.find_one(query)
        except PyMongoError as e:
            raise RuntimeError(f"Error finding user: {str(e)}")
        if document is None:
            return None
        return self._document_to_user(document)

    def _document_to_user(self, document: dict) -> User:
        """
        Convert MongoDB document to User domain model

        Args:
            document: MongoDB document dictionary

        Returns:
            User domain model
        """
        if not document or UserFields.MONGO_ID not in document:
            raise ValueError("Invalid document: missing _id field")

        return User(
            id=str(document[UserFields.MONGO_ID]),
            username=document.get(UserFields.USERNAME, ""),
            email=document.get(UserFields.EMAIL, ""),
            hashed_password=document.get(UserFields.PASSWORD, ""),
            verify_code=document.get(UserFields.VERIFY_CODE, ""),
            verify_code_expiry=ensure_utc(document.get(UserFields.VERIFY_CODE_EXPIRY)),
            is_verified=bool(document.get(UserFields.IS_VERIFIED, False)),
            is_accepting_messages=bool(document.get(UserFields.IS_ACCEPTING_MESSAGES, True)),
            messages=[
                self._document_to_message(m) for m in document.get(UserFields.MESSAGES) or []
            ],
        )

    def _user_to_dict(self, user: User) -> dict:
        """
        Convert User domain model to the MongoDB fields it owns

        Args:
            user: User domain model

        Returns:
            Dictionary ready for MongoDB storage (without _id and messages)
        """
        return {
            UserFields.USERNAME: user.username,
            UserFields.EMAIL: user.email,
            UserFields.PASSWORD: user.hashed_password,
            UserFields.VERIFY_CODE: user.verify_code,
            UserFields.VERIFY_CODE_EXPIRY: user.verify_code_expiry,
            UserFields.IS_VERIFIED: user.is_verified,
            UserFields.IS_ACCEPTING_MESSAGES: user.is_accepting_messages,
        }

    def _message_to_dict(self, message: Message) -> dict:
        return {
            MessageFields.MONGO_ID: _to_object_id(message.id) or ObjectId(),
            MessageFields.CONTENT: message.content,
            MessageFields.CREATED_AT: message.created_at,
        }

    def _document_to_message(self, document: dict) -> Message:
        return Message(
            id=str(document[MessageFields.MONGO_ID]),
            content=document.get(MessageFields.CONTENT, ""),
            created_at=ensure_utc(document.get(MessageFields.CREATED_AT)),
        )
