# Standard library imports
import logging

# External package imports
from fastapi import APIRouter, Depends, HTTPException, status

# Local application imports
from ...application.dto.auth_dto import SessionUser
from ...application.dto.message_dto import (
    AcceptanceStatusResponse,
    AcceptMessagesRequest,
    ApiResponse,
    MessageListResponse,
    SendMessageRequest,
    SuggestionsResponse,
)
from ...application.use_cases.message.acceptance import (
    GetAcceptanceStatusUseCase,
    SetAcceptanceStatusUseCase,
)
from ...application.use_cases.message.send_message import SendMessageUseCase
from ...application.use_cases.message.list_messages import ListMessagesUseCase
from ...application.use_cases.message.delete_message import DeleteMessageUseCase
from ...application.use_cases.message.suggest_messages import SuggestMessagesUseCase
from ...di.container import get_container
from ...domain.exceptions import (
    NotAcceptingMessagesError,
    NotFoundError,
    SuggestionUnavailableError,
)
from .dependencies import get_current_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["messages"])


@router.get("/accept-messages", response_model=AcceptanceStatusResponse)
async def get_acceptance_status(
    current_session: SessionUser = Depends(get_current_session),
) -> AcceptanceStatusResponse:
    """
    Read whether the current user accepts new messages

    The flag in the token may be stale, so the stored value is returned.
    """
    container = get_container()
    get_status_use_case = container.get(GetAcceptanceStatusUseCase)

    try:
        is_accepting = await get_status_use_case.execute(current_session.id)
    except NotFoundError as exception:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exception.message)
    except RuntimeError:
        logger.error("Error retrieving message acceptance status", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error retrieving message acceptance status"
        )

    return AcceptanceStatusResponse(success=True, is_accepting_messages=is_accepting)


@router.post("/accept-messages", response_model=AcceptanceStatusResponse)
async def set_acceptance_status(
    request: AcceptMessagesRequest,
    current_session: SessionUser = Depends(get_current_session),
) -> AcceptanceStatusResponse:
    """
    Overwrite the current user's acceptance flag with the supplied value

    Args:
        request: {"acceptMessages": bool}
        current_session: Current session (from dependency)
    """
    container = get_container()
    set_status_use_case = container.get(SetAcceptanceStatusUseCase)

    try:
        is_accepting = await set_status_use_case.execute(current_session.id, request.accept_messages)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Unable to find user to update message acceptance status"
        )
    except RuntimeError:
        logger.error("Error updating message acceptance status", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error updating message acceptance status"
        )

    return AcceptanceStatusResponse(
        success=True,
        message="Message acceptance status updated successfully",
        is_accepting_messages=is_accepting,
    )


@router.get("/messages", response_model=MessageListResponse)
async def list_messages(
    current_session: SessionUser = Depends(get_current_session),
) -> MessageListResponse:
    """
    List the current user's messages, newest first

    Returns:
        MessageListResponse (an empty list is still a success)
    """
    container = get_container()
    list_messages_use_case = container.get(ListMessagesUseCase)

    try:
        messages = await list_messages_use_case.execute(current_session.id)
    except NotFoundError as exception:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exception.message)
    except RuntimeError:
        logger.error("Error retrieving messages", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )

    return MessageListResponse(success=True, messages=messages)


@router.post("/messages/send", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def send_message(request: SendMessageRequest) -> ApiResponse:
    """
    Deposit an anonymous message for a user (no authentication)

    Args:
        request: Target username and message content
    """
    container = get_container()
    send_message_use_case = container.get(SendMessageUseCase)

    try:
        await send_message_use_case.execute(request)
    except NotFoundError as exception:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exception.message)
    except NotAcceptingMessagesError as exception:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=exception.message)
    except RuntimeError:
        logger.error("Error sending message", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error sending message"
        )

    return ApiResponse(success=True, message="Message sent successfully")


@router.delete("/messages/{message_id}", response_model=ApiResponse)
async def delete_message(
    message_id: str,
    current_session: SessionUser = Depends(get_current_session),
) -> ApiResponse:
    """
    Delete one of the current user's messages

    Args:
        message_id: ID of the message
        current_session: Current session (from dependency)
    """
    container = get_container()
    delete_message_use_case = container.get(DeleteMessageUseCase)

    try:
        await delete_message_use_case.execute(current_session.id, message_id)
    except NotFoundError as exception:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exception.message)
    except RuntimeError:
        logger.error("Error deleting message", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error deleting message"
        )

    return ApiResponse(success=True, message="Message deleted")


@router.post("/suggest-messages", response_model=SuggestionsResponse)
async def suggest_messages() -> SuggestionsResponse:
    """Suggest three conversation starters for anonymous senders"""
    container = get_container()
    suggest_use_case = container.get(SuggestMessagesUseCase)

    try:
        suggestions = await suggest_use_case.execute()
    except SuggestionUnavailableError as exception:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exception.message)

    return SuggestionsResponse(success=True, suggestions=suggestions)
