"""
Chat API endpoints.

Relay for conversation turns and per-user history replay.
"""

from fastapi import APIRouter, HTTPException, status

from app.api.deps import History, Relay
from app.core.exceptions import InvalidRequestError, RelayError, UpstreamError
from app.core.logger import logger
from app.models.chat import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    HistoryResponse,
)

router = APIRouter()

INVALID_CHAT_REQUEST = "Invalid request. userId and messages array required."
CHAT_FAILED = "Failed to process chat request"
HISTORY_FAILED = "Failed to fetch chat history"


@router.post(
    "",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(request: ChatRequest, relay_service: Relay):
    """
    Send the conversation so far and receive the assistant's reply.

    Args:
        request: userId and the full message list, oldest first
        relay_service: Relay service instance

    Returns:
        The assistant reply
    """
    try:
        reply = await relay_service.relay(user_id=request.userId, messages=request.messages)
    except InvalidRequestError:
        raise
    except UpstreamError as e:
        logger.error(f"Error in chat endpoint: {e.message} details={e.details}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=CHAT_FAILED,
        ) from e
    except Exception as e:
        logger.exception(f"Unexpected error in chat endpoint: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=CHAT_FAILED,
        ) from e

    return ChatResponse(reply=reply)


@router.get(
    "/history/{user_id}",
    response_model=HistoryResponse,
    responses={500: {"model": ErrorResponse}},
)
async def get_history(user_id: str, history_service: History):
    """Get a user's stored turns, oldest first."""
    try:
        history = await history_service.get_history(user_id)
    except RelayError as e:
        logger.error(f"Error fetching chat history: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=HISTORY_FAILED,
        ) from e
    except Exception as e:
        logger.exception(f"Unexpected error fetching chat history: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=HISTORY_FAILED,
        ) from e

    return HistoryResponse(history=history)
