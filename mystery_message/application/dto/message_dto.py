from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .base import CamelModel
from ...domain.models.message import MAX_MESSAGE_LENGTH


class ApiResponse(CamelModel):
    """Generic success/failure envelope"""
    success: bool
    message: Optional[str] = None


class AcceptMessagesRequest(CamelModel):
    """DTO for setting the acceptance flag ({"acceptMessages": bool})"""
    accept_messages: bool


class AcceptanceStatusResponse(ApiResponse):
    is_accepting_messages: bool


class SendMessageRequest(BaseModel):
    """DTO for an anonymous message addressed to a username"""
    username: str = Field(min_length=1)
    content: str = Field(min_length=1, max_length=MAX_MESSAGE_LENGTH)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message content is required")
        return value


class MessageResponse(CamelModel):
    """DTO for a received message"""
    id: str = Field(alias="_id")
    content: str
    created_at: datetime


class MessageListResponse(ApiResponse):
    messages: List[MessageResponse]


class SuggestionsResponse(ApiResponse):
    suggestions: List[str]
