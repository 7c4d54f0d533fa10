from .sign_up import SignUpUseCase, SignUpTransition, plan_sign_up
from .verify_code import VerifyCodeUseCase
from .check_username_unique import CheckUsernameUniqueUseCase
from .sign_in import SignInUseCase
from .get_current_session import GetCurrentSessionUseCase

__all__ = [
    "SignUpUseCase",
    "SignUpTransition",
    "plan_sign_up",
    "VerifyCodeUseCase",
    "CheckUsernameUniqueUseCase",
    "SignInUseCase",
    "GetCurrentSessionUseCase",
]
