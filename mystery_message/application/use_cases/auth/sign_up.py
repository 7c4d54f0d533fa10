# Standard library imports
import enum
import logging
from datetime import timedelta
from typing import Optional

# Local application imports
from ....core.config import get_settings
from ....core.security import hash_password, generate_verify_code
from ....domain.exceptions import EmailDeliveryError, EmailTakenError, UsernameTakenError
from ....domain.models.user import User
from ....domain.repositories.user_repository import UserRepository
from ....utils.datetime_utils import utc_now
from ....utils.email_service import SmtpVerificationEmailSender
from ...dto.auth_dto import SignUpRequest
from ...dto.message_dto import ApiResponse

logger = logging.getLogger(__name__)


class SignUpTransition(enum.Enum):
    """What a sign-up does with the account that already owns the email, if any"""
    CREATE_NEW = "create_new"
    REISSUE_UNVERIFIED = "reissue_unverified"
    REJECT_VERIFIED_DUPLICATE = "reject_verified_duplicate"


def plan_sign_up(existing_by_email: Optional[User]) -> SignUpTransition:
    """
    Choose the sign-up transition for an email.

    The lookup that produced ``existing_by_email`` and the write that follows
    are not atomic: two concurrent sign-ups for a new email can both plan
    CREATE_NEW, and the loser fails on the unique index (DuplicateKeyError)
    instead of taking the re-issue path.
    """
    if existing_by_email is None:
        return SignUpTransition.CREATE_NEW
    if existing_by_email.is_verified:
        return SignUpTransition.REJECT_VERIFIED_DUPLICATE
    return SignUpTransition.REISSUE_UNVERIFIED


class SignUpUseCase:
    """Use case for registering an account and issuing its verification code"""

    SUCCESS_MESSAGE = "User registered successfully. Please verify your email"

    def __init__(
        self,
        user_repository: UserRepository,
        email_sender: SmtpVerificationEmailSender,
    ) -> None:
        self.user_repository = user_repository
        self.email_sender = email_sender

    async def execute(self, request: SignUpRequest) -> ApiResponse:
        """
        Register a user (or re-issue a code to an unverified one) and email the code

        Args:
            request: Sign-up request with username, email and password

        Returns:
            ApiResponse on success

        Raises:
            UsernameTakenError: If a verified user owns the username
            EmailTakenError: If a verified user owns the email
            DuplicateKeyError: If a unique index rejects the write
            EmailDeliveryError: If the verification email could not be sent
        """
        if await self.user_repository.find_by_username(request.username, verified_only=True):
            raise UsernameTakenError()

        existing_user = await self.user_repository.find_by_email(request.email)
        transition = plan_sign_up(existing_user)

        if transition is SignUpTransition.REJECT_VERIFIED_DUPLICATE:
            raise EmailTakenError()

        verify_code = generate_verify_code()
        expiry = utc_now() + timedelta(minutes=get_settings().verify_code_ttl_minutes)
        hashed_password = hash_password(request.password)

        if transition is SignUpTransition.REISSUE_UNVERIFIED:
            # Unverified accounts may still change their username
            existing_user.username = request.username
            existing_user.hashed_password = hashed_password
            existing_user.verify_code = verify_code
            existing_user.verify_code_expiry = expiry
            user = await self.user_repository.save(existing_user)
        else:
            user = await self.user_repository.create(User(
                id=None,  # Will be set by repository
                username=request.username,
                email=request.email,
                hashed_password=hashed_password,
                verify_code=verify_code,
                verify_code_expiry=expiry,
                is_verified=False,
                is_accepting_messages=True,
                messages=[],
            ))

        logger.info("Sign-up %s for user %s", transition.value, user.id)

        email_result = await self.email_sender.send_verification_email(
            user.email,
            user.username,
            verify_code,
        )
        if not email_result.success:
            raise EmailDeliveryError(email_result.message)

        return ApiResponse(success=True, message=self.SUCCESS_MESSAGE)
