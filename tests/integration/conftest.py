"""
Fixtures for API tests: the real app wired to an in-memory container.
"""
from contextlib import ExitStack
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from mystery_message.di.base_container import BaseContainer
from mystery_message.di.providers import AuthProvider, MessageProvider
from mystery_message.domain.repositories.user_repository import UserRepository
from mystery_message.infrastructure.db.mongo_connection import MongoConnection
from mystery_message.infrastructure.external.groq_suggestion_service import GroqSuggestionService
from mystery_message.utils.email_service import EmailDispatchResult, SmtpVerificationEmailSender

CONTAINER_LOOKUPS = (
    "mystery_message.main.get_container",
    "mystery_message.api.v1.auth_controller.get_container",
    "mystery_message.api.v1.message_controller.get_container",
    "mystery_message.api.v1.dependencies.get_container",
)


def _mock_connection():
    connection = MagicMock(spec=MongoConnection)
    connection.ensure_indexes = AsyncMock()
    return connection


@pytest.fixture
def email_sender():
    sender = AsyncMock(spec=SmtpVerificationEmailSender)
    sender.send_verification_email.return_value = EmailDispatchResult(True, "Verification email sent successfully")
    return sender


@pytest.fixture
def suggestion_service():
    service = AsyncMock(spec=GroqSuggestionService)
    service.generate.return_value = "What inspires you?||Favorite book?||Best trip?"
    return service


@pytest.fixture
def app_container(memory_user_repo, email_sender, suggestion_service):
    """Container using the real use cases over the in-memory repository."""
    container = BaseContainer()
    container.register_singleton(MongoConnection, _mock_connection())
    container.register_singleton(UserRepository, memory_user_repo)
    container.register_singleton(SmtpVerificationEmailSender, email_sender)
    container.register_singleton(GroqSuggestionService, suggestion_service)
    AuthProvider.register(container)
    MessageProvider.register(container)
    return container


@pytest.fixture
def client(app_container, mock_settings):
    """Test client whose every container lookup resolves to app_container."""
    from mystery_message.main import app

    with ExitStack() as stack:
        for target in CONTAINER_LOOKUPS:
            stack.enter_context(patch(target, return_value=app_container))
        with TestClient(app) as test_client:
            yield test_client


@pytest.fixture
def sign_up_and_verify(client, email_sender):
    """Register, verify and sign in a user; returns the auth headers."""

    def _sign_up_and_verify(username="alice", email="a@x.com", password="secret123"):
        response = client.post(
            "/api/v1/auth/sign-up",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201
        code = email_sender.send_verification_email.await_args.args[2]
        response = client.post("/api/v1/auth/verify-code", json={"username": username, "code": code})
        assert response.status_code == 200
        response = client.post("/api/v1/auth/sign-in", json={"identifier": email, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _sign_up_and_verify
