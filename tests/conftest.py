"""
Shared pytest fixtures for Mystery Message tests.
"""
import copy
import dataclasses
import os
from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest
from bson import ObjectId

from mystery_message.core import config
from mystery_message.core.security import hash_password
from mystery_message.domain.exceptions import DuplicateKeyError, UserNotFoundError
from mystery_message.domain.models.user import User
from mystery_message.domain.repositories.user_repository import UserRepository
from mystery_message.utils.datetime_utils import utc_now


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    env_vars = {
        "MONGO_URI": "mongodb://localhost:27017",
        "MONGO_DB_NAME": "test_mystery_message",
        "JWT_SECRET_KEY": "test_secret_key_for_testing_only",
        "JWT_ALGORITHM": "HS256",
        "ACCESS_TOKEN_EXPIRE_MINUTES": "1440",
        "VERIFY_CODE_TTL_MINUTES": "60",
        "GROQ_API_KEY": "",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def mock_settings(mock_env):
    """Fresh Settings built from the test environment, returned by every get_settings() call."""
    settings = config.Settings()
    with patch.object(config, "_settings", settings):
        yield settings


@pytest.fixture
def mock_user_repo():
    """Mock UserRepository with async methods."""
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def make_user():
    """Factory for User domain models with sensible defaults."""

    def _make_user(**overrides) -> User:
        password = overrides.pop("password", "secret123")
        values = dict(
            id="64b7f0c2a1b2c3d4e5f60718",
            username="alice",
            email="a@x.com",
            hashed_password=hash_password(password),
            verify_code="123456",
            verify_code_expiry=utc_now() + timedelta(hours=1),
            is_verified=False,
            is_accepting_messages=True,
            messages=[],
        )
        values.update(overrides)
        return User(**values)

    return _make_user


class InMemoryUserRepository(UserRepository):
    """Dict-backed UserRepository enforcing the unique username/email indexes."""

    def __init__(self) -> None:
        self.users = {}

    async def find_by_identifier(self, identifier):
        for user in self.users.values():
            if identifier in (user.email, user.username):
                return copy.deepcopy(user)
        return None

    async def find_by_username(self, username, verified_only=False):
        for user in self.users.values():
            if user.username == username and (user.is_verified or not verified_only):
                return copy.deepcopy(user)
        return None

    async def find_by_email(self, email):
        for user in self.users.values():
            if user.email == email:
                return copy.deepcopy(user)
        return None

    async def find_by_id(self, user_id):
        user = self.users.get(user_id)
        return copy.deepcopy(user) if user else None

    def _check_unique(self, user):
        for other in self.users.values():
            if other.id != user.id and (other.username == user.username or other.email == user.email):
                raise DuplicateKeyError()

    async def create(self, user):
        self._check_unique(user)
        stored = dataclasses.replace(copy.deepcopy(user), id=str(ObjectId()))
        self.users[stored.id] = stored
        return copy.deepcopy(stored)

    async def save(self, user):
        current = self.users.get(user.id)
        if current is None:
            raise UserNotFoundError()
        self._check_unique(user)
        self.users[user.id] = dataclasses.replace(copy.deepcopy(user), messages=current.messages)
        return copy.deepcopy(self.users[user.id])

    async def update_acceptance(self, user_id, is_accepting_messages):
        user = self.users.get(user_id)
        if user is None:
            raise UserNotFoundError()
        user.is_accepting_messages = is_accepting_messages
        return copy.deepcopy(user)

    async def append_message(self, user_id, message):
        user = self.users.get(user_id)
        if user is None:
            raise UserNotFoundError()
        stored = dataclasses.replace(message, id=message.id or str(ObjectId()))
        user.messages.append(stored)
        return copy.deepcopy(stored)

    async def delete_message(self, user_id, message_id):
        user = self.users.get(user_id)
        if user is None:
            return False
        remaining = [m for m in user.messages if m.id != message_id]
        deleted = len(remaining) != len(user.messages)
        user.messages = remaining
        return deleted

    async def retrieve_messages_sorted(self, user_id):
        user = self.users.get(user_id)
        if user is None:
            return None
        return sorted(
            copy.deepcopy(user.messages),
            key=lambda m: (m.created_at, m.id),
            reverse=True,
        )


@pytest.fixture
def memory_user_repo():
    """In-memory UserRepository for workflow tests."""
    return InMemoryUserRepository()
