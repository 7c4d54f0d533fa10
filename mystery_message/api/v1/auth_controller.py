# Standard library imports
import logging
from typing import Optional

# External package imports
from fastapi import APIRouter, Depends, HTTPException, Query, status

# Local application imports
from ...application.dto.auth_dto import (
    SessionUser,
    SignInRequest,
    SignUpRequest,
    TokenResponse,
    VerifyCodeRequest,
    username_errors,
)
from ...application.dto.message_dto import ApiResponse
from ...application.use_cases.auth.sign_up import SignUpUseCase
from ...application.use_cases.auth.verify_code import VerifyCodeUseCase
from ...application.use_cases.auth.check_username_unique import CheckUsernameUniqueUseCase
from ...application.use_cases.auth.sign_in import SignInUseCase
from ...core.config import get_settings
from ...di.container import get_container
from ...domain.exceptions import (
    AuthenticationError,
    DuplicateKeyError,
    EmailDeliveryError,
    UserNotFoundError,
    VerificationError,
)
from .dependencies import get_current_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["authentication"])


@router.post("/sign-up", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(request: SignUpRequest) -> ApiResponse:
    """
    Register a user and email a verification code

    Args:
        request: Sign-up request

    Returns:
        ApiResponse confirming the code was sent
    """
    container = get_container()
    sign_up_use_case = container.get(SignUpUseCase)

    try:
        return await sign_up_use_case.execute(request)
    except DuplicateKeyError as exception:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exception.message)
    except EmailDeliveryError as exception:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exception.message)
    except RuntimeError:
        logger.error("Error registering user", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error registering user"
        )


@router.get("/check-username-unique", response_model=ApiResponse)
async def check_username_unique(username: Optional[str] = Query(default=None)) -> ApiResponse:
    """
    Report whether a username is still available

    A taken username is a 200 with success=false; only malformed input is a 400.
    """
    if username is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid query parameters")

    errors = username_errors(username.strip())
    if errors:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=", ".join(errors))

    container = get_container()
    check_use_case = container.get(CheckUsernameUniqueUseCase)

    try:
        return await check_use_case.execute(username.strip())
    except RuntimeError:
        logger.error("Error checking username", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error checking username"
        )


@router.post("/verify-code", response_model=ApiResponse)
async def verify_code(request: VerifyCodeRequest) -> ApiResponse:
    """
    Verify an account with the emailed code

    An expired code means the user has to sign up again for a fresh one.
    """
    container = get_container()
    verify_use_case = container.get(VerifyCodeUseCase)

    try:
        return await verify_use_case.execute(request)
    except UserNotFoundError as exception:
        raise HTTPException(
            status_code=get_settings().verify_not_found_status,
            detail=exception.message
        )
    except VerificationError as exception:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exception.message)
    except RuntimeError:
        logger.error("Error verifying user", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error verifying user"
        )


@router.post("/sign-in", response_model=TokenResponse)
async def sign_in(request: SignInRequest) -> TokenResponse:
    """
    Authenticate with username or email and get a session token

    Args:
        request: Sign-in request

    Returns:
        TokenResponse with access token
    """
    container = get_container()
    sign_in_use_case = container.get(SignInUseCase)

    try:
        return await sign_in_use_case.execute(request)
    except AuthenticationError as exception:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=exception.message
        )
    except RuntimeError:
        logger.error("Error signing in", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error signing in"
        )


@router.get("/session", response_model=SessionUser)
async def get_session(current_session: SessionUser = Depends(get_current_session)) -> SessionUser:
    """
    Get the session carried by the bearer token

    Args:
        current_session: Current session (from dependency)

    Returns:
        SessionUser with identity and cached flags
    """
    return current_session
