# Standard library imports
import logging
from urllib.parse import unquote

# Local application imports
from ....domain.exceptions import CodeExpiredError, InvalidCodeError, UserNotFoundError
from ....domain.repositories.user_repository import UserRepository
from ....utils.datetime_utils import utc_now
from ...dto.auth_dto import VerifyCodeRequest
from ...dto.message_dto import ApiResponse

logger = logging.getLogger(__name__)


class VerifyCodeUseCase:
    """Use case for confirming account ownership with the emailed code"""

    SUCCESS_MESSAGE = "Account verified successfully"

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, request: VerifyCodeRequest) -> ApiResponse:
        """
        Verify a user's code

        Args:
            request: Username (possibly URL-encoded) and the submitted code

        Returns:
            ApiResponse on success; repeating a successful call is a no-op success

        Raises:
            UserNotFoundError: If no user has the username
            CodeExpiredError: If the code window has closed, whether or not the code matches
            InvalidCodeError: If the code does not match
        """
        username = unquote(request.username)
        user = await self.user_repository.find_by_username(username)
        if user is None:
            raise UserNotFoundError()

        code_matches = user.code_matches(request.code)
        if user.is_verified and code_matches:
            return ApiResponse(success=True, message=self.SUCCESS_MESSAGE)

        if user.is_code_expired(utc_now()):
            raise CodeExpiredError()
        if not code_matches:
            raise InvalidCodeError()

        user.is_verified = True
        await self.user_repository.save(user)
        logger.info("User %s verified", user.id)
        return ApiResponse(success=True, message=self.SUCCESS_MESSAGE)
