# Local application imports
from ....domain.exceptions import BadCredentialsError, NoSuchUserError, NotVerifiedError
from ....domain.repositories.user_repository import UserRepository
from ....core.security import verify_password, create_jwt_token
from ...dto.auth_dto import SESSION_TOKEN_VERSION, SessionPayload, SignInRequest, TokenResponse


class SignInUseCase:
    """Use case for authenticating a user and minting a session token"""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, request: SignInRequest) -> TokenResponse:
        """
        Authenticate by username or email and generate an access token

        Args:
            request: Sign-in request with identifier and password

        Returns:
            TokenResponse carrying the signed session token

        Raises:
            NoSuchUserError: If no user matches the identifier
            NotVerifiedError: If the account is unverified (checked before the password)
            BadCredentialsError: If the password does not match
        """
        user = await self.user_repository.find_by_identifier(request.identifier)
        if user is None:
            raise NoSuchUserError()

        if not user.is_verified:
            raise NotVerifiedError()

        if not verify_password(request.password, user.hashed_password):
            raise BadCredentialsError()

        payload = SessionPayload(
            ver=SESSION_TOKEN_VERSION,
            sub=user.id or "",
            username=user.username,
            is_verified=user.is_verified,
            is_accepting_messages=user.is_accepting_messages,
        )
        return TokenResponse(access_token=create_jwt_token(payload.model_dump()))
