# External package imports
from pydantic import ValidationError

# Local application imports
from ....core.security import decode_jwt_token
from ....domain.exceptions import UnauthenticatedError
from ...dto.auth_dto import SessionPayload, SessionUser


class GetCurrentSessionUseCase:
    """Use case for turning a bearer token into the request's session"""

    async def execute(self, token: str) -> SessionUser:
        """
        Decode and validate a session token; no store lookup is made

        Args:
            token: JWT access token

        Returns:
            SessionUser with identity and the flags cached at sign-in

        Raises:
            UnauthenticatedError: If the token is missing, invalid, expired or malformed
        """
        if not token:
            raise UnauthenticatedError()

        try:
            claims = decode_jwt_token(token)
            payload = SessionPayload.model_validate(claims)
        except (ValueError, ValidationError):
            raise UnauthenticatedError()

        return SessionUser(
            id=payload.sub,
            username=payload.username,
            is_verified=payload.is_verified,
            is_accepting_messages=payload.is_accepting_messages,
        )
