# Local application imports
from ....domain.repositories.user_repository import UserRepository
from ...dto.message_dto import ApiResponse


class CheckUsernameUniqueUseCase:
    """Use case for live username availability checks during sign-up"""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, username: str) -> ApiResponse:
        """
        Only verified accounts hold a username; unverified ones can be re-issued.

        Args:
            username: Already-validated username

        Returns:
            ApiResponse with success False when taken, True when free
        """
        existing_user = await self.user_repository.find_by_username(username, verified_only=True)
        if existing_user is not None:
            return ApiResponse(success=False, message="Username is already taken")
        return ApiResponse(success=True, message="Username is unique")
