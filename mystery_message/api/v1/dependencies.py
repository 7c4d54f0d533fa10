# Standard library imports
from typing import Optional

# External package imports
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# Local application imports
from ...application.use_cases.auth.get_current_session import GetCurrentSessionUseCase
from ...application.dto.auth_dto import SessionUser
from ...domain.exceptions import UnauthenticatedError
from ...di.container import get_container


# auto_error=False so a missing header gets the same 401 body as a bad token
security_scheme = HTTPBearer(auto_error=False)


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
) -> SessionUser:
    """
    FastAPI dependency that re-derives the session from the bearer token on every request

    Args:
        credentials: HTTP Bearer token credentials, if present

    Returns:
        SessionUser for the request

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    token = credentials.credentials if credentials else ""

    container = get_container()
    get_current_session_use_case = container.get(GetCurrentSessionUseCase)

    try:
        return await get_current_session_use_case.execute(token)
    except UnauthenticatedError as exception:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=exception.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
