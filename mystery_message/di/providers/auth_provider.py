from typing import TYPE_CHECKING
from ...domain.repositories.user_repository import UserRepository
from ...utils.email_service import SmtpVerificationEmailSender
from ...application.use_cases.auth.sign_up import SignUpUseCase
from ...application.use_cases.auth.verify_code import VerifyCodeUseCase
from ...application.use_cases.auth.check_username_unique import CheckUsernameUniqueUseCase
from ...application.use_cases.auth.sign_in import SignInUseCase
from ...application.use_cases.auth.get_current_session import GetCurrentSessionUseCase

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class AuthProvider:
    """Authentication use case provider - registers all auth-related use cases"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all authentication use cases.
        Use cases are created on-demand via factories.
        """
        container.register_factory(
            SignUpUseCase,
            lambda: SignUpUseCase(
                user_repository=container.get(UserRepository),
                email_sender=container.get(SmtpVerificationEmailSender),
            )
        )

        container.register_factory(
            VerifyCodeUseCase,
            lambda: VerifyCodeUseCase(
                user_repository=container.get(UserRepository)
            )
        )

        container.register_factory(
            CheckUsernameUniqueUseCase,
            lambda: CheckUsernameUniqueUseCase(
                user_repository=container.get(UserRepository)
            )
        )

        container.register_factory(
            SignInUseCase,
            lambda: SignInUseCase(
                user_repository=container.get(UserRepository)
            )
        )

        container.register_factory(GetCurrentSessionUseCase, GetCurrentSessionUseCase)
