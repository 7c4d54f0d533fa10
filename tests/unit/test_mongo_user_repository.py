"""
Unit tests for MongoUserRepository with a mocked Motor collection.
"""
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError, PyMongoError

from mystery_message.domain.exceptions import DuplicateKeyError, UserNotFoundError
from mystery_message.domain.models.message import Message
from mystery_message.infrastructure.db.mongo_user_repository import MongoUserRepository
from mystery_message.utils.datetime_utils import utc_now


USER_OID = ObjectId("64b7f0c2a1b2c3d4e5f60718")


def _user_document(**overrides):
    document = {
        "_id": USER_OID,
        "username": "alice",
        "email": "a@x.com",
        "password": "$2b$10$hash",
        "verifyCode": "123456",
        "verifyCodeExpiry": datetime(2030, 1, 1, 12, 0),
        "isVerified": True,
        "isAcceptingMessages": True,
        "messages": [],
    }
    document.update(overrides)
    return document


@pytest.fixture
def collection():
    collection = MagicMock()
    collection.find_one = AsyncMock()
    collection.insert_one = AsyncMock()
    collection.find_one_and_update = AsyncMock()
    collection.update_one = AsyncMock()
    return collection


@pytest.fixture
def repo(collection):
    return MongoUserRepository(collection)


def _aggregate_over(collection, user_document):
    """Mock aggregate that runs the pipeline's $unwind/$sort/$group over one user document."""

    def aggregate(pipeline):
        sort_spec = next(stage["$sort"] for stage in pipeline if "$sort" in stage)
        messages = list(user_document["messages"])
        # Apply keys from least to most significant; list.sort is stable
        for path, direction in reversed(list(sort_spec.items())):
            field = path.split(".", 1)[1]
            messages.sort(key=lambda m: m[field], reverse=direction == -1)
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[{"_id": user_document["_id"], "messages": messages}])
        return cursor

    collection.aggregate = MagicMock(side_effect=aggregate)


def _aggregate_returning(collection, documents):
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=documents)
    collection.aggregate = MagicMock(return_value=cursor)
    return cursor


class TestLookups:
    """Tests for the find_* methods"""

    @pytest.mark.asyncio
    async def test_find_by_identifier_matches_email_or_username(self, repo, collection):
        collection.find_one.return_value = _user_document()

        user = await repo.find_by_identifier("alice")

        assert user.id == str(USER_OID)
        assert user.hashed_password == "$2b$10$hash"
        assert user.verify_code_expiry.tzinfo is not None
        collection.find_one.assert_awaited_once_with(
            {"$or": [{"email": "alice"}, {"username": "alice"}]}
        )

    @pytest.mark.asyncio
    async def test_find_by_username_verified_only(self, repo, collection):
        collection.find_one.return_value = None

        assert await repo.find_by_username("alice", verified_only=True) is None
        collection.find_one.assert_awaited_once_with({"username": "alice", "isVerified": True})

    @pytest.mark.asyncio
    async def test_find_by_id_with_malformed_id(self, repo, collection):
        assert await repo.find_by_id("not-an-object-id") is None
        collection.find_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_driver_error_becomes_runtime_error(self, repo, collection):
        collection.find_one.side_effect = PyMongoError("down")

        with pytest.raises(RuntimeError, match="Error finding user"):
            await repo.find_by_email("a@x.com")


class TestWrites:
    """Tests for create, save and update_acceptance"""

    @pytest.mark.asyncio
    async def test_create_inserts_camel_case_document(self, repo, collection, make_user):
        collection.insert_one.return_value = MagicMock(inserted_id=USER_OID)
        collection.find_one.return_value = _user_document(isVerified=False)

        created = await repo.create(make_user(id=None))

        inserted = collection.insert_one.await_args.args[0]
        assert "_id" not in inserted
        assert inserted["verifyCode"] == "123456"
        assert inserted["isVerified"] is False
        assert inserted["isAcceptingMessages"] is True
        assert inserted["messages"] == []
        assert created.id == str(USER_OID)

    @pytest.mark.asyncio
    async def test_create_duplicate_key(self, repo, collection, make_user):
        collection.insert_one.side_effect = MongoDuplicateKeyError("E11000 duplicate key")

        with pytest.raises(DuplicateKeyError):
            await repo.create(make_user(id=None))

    @pytest.mark.asyncio
    async def test_create_read_back_failure_is_runtime_error(self, repo, collection, make_user):
        collection.insert_one.return_value = MagicMock(inserted_id=USER_OID)
        collection.find_one.side_effect = PyMongoError("connection reset")

        with pytest.raises(RuntimeError, match="Error creating user"):
            await repo.create(make_user(id=None))

    @pytest.mark.asyncio
    async def test_save_sets_fields_without_messages(self, repo, collection, make_user):
        collection.find_one_and_update.return_value = _user_document(username="alice2")

        saved = await repo.save(make_user(id=str(USER_OID), username="alice2"))

        query, update = collection.find_one_and_update.await_args.args
        assert query == {"_id": USER_OID}
        assert update["$set"]["username"] == "alice2"
        assert "messages" not in update["$set"]
        assert collection.find_one_and_update.await_args.kwargs["return_document"] is ReturnDocument.AFTER
        assert saved.username == "alice2"

    @pytest.mark.asyncio
    async def test_save_missing_user(self, repo, collection, make_user):
        collection.find_one_and_update.return_value = None

        with pytest.raises(UserNotFoundError):
            await repo.save(make_user(id=str(USER_OID)))

    @pytest.mark.asyncio
    async def test_update_acceptance(self, repo, collection):
        collection.find_one_and_update.return_value = _user_document(isAcceptingMessages=False)

        user = await repo.update_acceptance(str(USER_OID), False)

        assert user.is_accepting_messages is False
        _, update = collection.find_one_and_update.await_args.args
        assert update == {"$set": {"isAcceptingMessages": False}}

    @pytest.mark.asyncio
    async def test_update_acceptance_malformed_id(self, repo, collection):
        with pytest.raises(UserNotFoundError):
            await repo.update_acceptance("bogus", True)
        collection.find_one_and_update.assert_not_awaited()


class TestMessages:
    """Tests for append_message, delete_message and retrieve_messages_sorted"""

    @pytest.mark.asyncio
    async def test_append_message_pushes_with_new_id(self, repo, collection):
        collection.update_one.return_value = MagicMock(matched_count=1)
        created_at = utc_now()

        stored = await repo.append_message(
            str(USER_OID), Message(id=None, content="hello", created_at=created_at)
        )

        query, update = collection.update_one.await_args.args
        assert query == {"_id": USER_OID}
        pushed = update["$push"]["messages"]
        assert isinstance(pushed["_id"], ObjectId)
        assert pushed["content"] == "hello"
        assert pushed["createdAt"] == created_at
        assert stored.id == str(pushed["_id"])

    @pytest.mark.asyncio
    async def test_append_message_missing_user(self, repo, collection):
        collection.update_one.return_value = MagicMock(matched_count=0)

        with pytest.raises(UserNotFoundError):
            await repo.append_message(
                str(USER_OID), Message(id=None, content="hello", created_at=utc_now())
            )

    @pytest.mark.asyncio
    async def test_delete_message_pulls_by_id(self, repo, collection):
        message_oid = ObjectId()
        collection.update_one.return_value = MagicMock(modified_count=1)

        assert await repo.delete_message(str(USER_OID), str(message_oid)) is True
        collection.update_one.assert_awaited_once_with(
            {"_id": USER_OID},
            {"$pull": {"messages": {"_id": message_oid}}},
        )

    @pytest.mark.asyncio
    async def test_delete_message_absent(self, repo, collection):
        collection.update_one.return_value = MagicMock(modified_count=0)

        assert await repo.delete_message(str(USER_OID), str(ObjectId())) is False

    @pytest.mark.asyncio
    async def test_delete_message_malformed_id(self, repo, collection):
        assert await repo.delete_message(str(USER_OID), "nope") is False
        collection.update_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_retrieve_sorted_pipeline(self, repo, collection):
        newer, older = ObjectId(), ObjectId()
        now = datetime(2030, 1, 1, 12, 0)
        _aggregate_returning(collection, [{
            "_id": USER_OID,
            "messages": [
                {"_id": newer, "content": "second", "createdAt": now},
                {"_id": older, "content": "first", "createdAt": now - timedelta(minutes=1)},
            ],
        }])

        messages = await repo.retrieve_messages_sorted(str(USER_OID))

        assert [m.content for m in messages] == ["second", "first"]
        assert messages[0].id == str(newer)
        pipeline = collection.aggregate.call_args.args[0]
        assert pipeline[0] == {"$match": {"_id": USER_OID}}
        assert pipeline[1] == {"$unwind": "$messages"}
        assert pipeline[2] == {"$sort": {"messages.createdAt": -1, "messages._id": -1}}
        assert pipeline[3] == {"$group": {"_id": "$_id", "messages": {"$push": "$messages"}}}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("insertion_order", [(0, 1, 2, 3), (3, 2, 1, 0), (2, 0, 3, 1)])
    async def test_retrieve_sorted_newest_first_for_any_insertion_order(
        self, repo, collection, insertion_order
    ):
        base = datetime(2030, 1, 1, 12, 0)
        tie_low, tie_high = ObjectId("64b7f0c2a1b2c3d4e5f60001"), ObjectId("64b7f0c2a1b2c3d4e5f60002")
        messages = [
            {"_id": ObjectId(), "content": "oldest", "createdAt": base - timedelta(hours=1)},
            {"_id": tie_low, "content": "tie-low", "createdAt": base},
            {"_id": tie_high, "content": "tie-high", "createdAt": base},
            {"_id": ObjectId(), "content": "newest", "createdAt": base + timedelta(minutes=5)},
        ]
        _aggregate_over(collection, _user_document(messages=[messages[i] for i in insertion_order]))

        result = await repo.retrieve_messages_sorted(str(USER_OID))

        assert [m.content for m in result] == ["newest", "tie-high", "tie-low", "oldest"]
        assert all(a.created_at >= b.created_at for a, b in zip(result, result[1:]))

    @pytest.mark.asyncio
    async def test_retrieve_empty_inbox(self, repo, collection):
        _aggregate_returning(collection, [])
        collection.find_one.return_value = {"_id": USER_OID}

        assert await repo.retrieve_messages_sorted(str(USER_OID)) == []

    @pytest.mark.asyncio
    async def test_retrieve_missing_user(self, repo, collection):
        _aggregate_returning(collection, [])
        collection.find_one.return_value = None

        assert await repo.retrieve_messages_sorted(str(USER_OID)) is None
