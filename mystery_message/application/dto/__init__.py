from .auth_dto import (
    SignUpRequest,
    SignInRequest,
    VerifyCodeRequest,
    TokenResponse,
    SessionPayload,
    SessionUser,
)
from .message_dto import (
    ApiResponse,
    AcceptMessagesRequest,
    AcceptanceStatusResponse,
    SendMessageRequest,
    MessageResponse,
    MessageListResponse,
    SuggestionsResponse,
)

__all__ = [
    "SignUpRequest",
    "SignInRequest",
    "VerifyCodeRequest",
    "TokenResponse",
    "SessionPayload",
    "SessionUser",
    "ApiResponse",
    "AcceptMessagesRequest",
    "AcceptanceStatusResponse",
    "SendMessageRequest",
    "MessageResponse",
    "MessageListResponse",
    "SuggestionsResponse",
]
