from .auth import (
    SignUpUseCase,
    VerifyCodeUseCase,
    CheckUsernameUniqueUseCase,
    SignInUseCase,
    GetCurrentSessionUseCase,
)
from .message import (
    GetAcceptanceStatusUseCase,
    SetAcceptanceStatusUseCase,
    SendMessageUseCase,
    ListMessagesUseCase,
    DeleteMessageUseCase,
    SuggestMessagesUseCase,
)

__all__ = [
    "SignUpUseCase",
    "VerifyCodeUseCase",
    "CheckUsernameUniqueUseCase",
    "SignInUseCase",
    "GetCurrentSessionUseCase",
    "GetAcceptanceStatusUseCase",
    "SetAcceptanceStatusUseCase",
    "SendMessageUseCase",
    "ListMessagesUseCase",
    "DeleteMessageUseCase",
    "SuggestMessagesUseCase",
]
