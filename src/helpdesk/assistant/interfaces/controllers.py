"""
Assistant Controllers (API Routes)
==================================

FastAPI routes for the chat assistant.

Controllers delegate to application services.
"""

import time

from fastapi import APIRouter, Depends, HTTPException, Request

from helpdesk.assistant.application import (
    AssistantService,
    ChatMessageDTO,
    ChatRequest,
    ChatResponse,
    ConversationHistoryResponse,
    ConversationService,
    CreateConversationRequest,
    CreateConversationResponse,
    IConversationRepository,
)
from helpdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/assistant", tags=["Assistant"])


# ========== Example payloads for Swagger ==========

CHAT_REQUEST_EXAMPLE = {
    "message": "quais são minhas solicitações pendentes?",
    "userId": "user-123",
    "conversationId": "5f0c7a52-9f0e-4a57-b2a4-1c1f0b0e8a11"
}

CHAT_RESPONSE_EXAMPLE = {
    "response": (
        "Suas solicitações pendentes:\n\n"
        "1. Impressora do financeiro\n"
        "   ID: REQ-0042\n"
        "   Status: Em Andamento\n"
        "   Prioridade: Alta\n"
        "   Data: 05/03/2024\n\n"
        "Para ver mais detalhes, acesse a seção \"Minhas Solicitações\" no menu."
    ),
    "conversationId": "5f0c7a52-9f0e-4a57-b2a4-1c1f0b0e8a11",
    "suggestions": []
}


# ========== Dependencies ==========

def get_assistant_service(request: Request) -> AssistantService:
    """Get the assistant built at startup."""
    assistant = getattr(request.app.state, "assistant_service", None)
    if assistant is None:
        raise HTTPException(status_code=503, detail="Assistant not configured")
    return assistant


def get_conversation_repository(request: Request) -> IConversationRepository:
    """Get the conversation store configured at startup."""
    repository = getattr(request.app.state, "conversation_repository", None)
    if repository is None:
        raise HTTPException(status_code=503, detail="Conversation store not configured")
    return repository


def get_conversation_service(
    assistant: AssistantService = Depends(get_assistant_service),
    conversations: IConversationRepository = Depends(get_conversation_repository)
) -> ConversationService:
    return ConversationService(assistant, conversations)


# ========== Route Handlers ==========

@router.post(
    "/chat",
    response_model=ChatResponse,
    response_model_exclude_none=True,
    summary="Send a message to the assistant",
    description="""
    Classify the message and answer it:
    - **Status queries** ("minhas solicitações", "chamado pendente", ...) are
      answered from the user's requests
    - **Create-request questions** get the step-by-step instructions
    - **Known IT problems** (internet, email, printer, software, hardware,
      password) get the remediation checklist
    - Anything else gets the capability menu

    A new conversation is created when `conversationId` is omitted. Both the
    message and the reply are appended to the conversation.
    """,
    responses={
        200: {
            "description": "Assistant reply",
            "content": {"application/json": {"example": CHAT_RESPONSE_EXAMPLE}}
        },
        404: {"description": "Conversation not found"},
        503: {"description": "Conversation store not available"}
    }
)
async def chat(
    request: Request,
    payload: ChatRequest,
    service: ConversationService = Depends(get_conversation_service)
):
    start_time = time.perf_counter()
    correlation_id = getattr(request.state, "correlation_id", "unknown")

    exchange = await service.handle_chat(
        message=payload.message,
        user_id=payload.user_id,
        conversation_id=payload.conversation_id
    )

    logger.info(
        "Assistant replied",
        extra={
            "correlation_id": correlation_id,
            "conversation_id": exchange.conversation_id,
            "intent": exchange.reply.intent.value,
            "processing_time_ms": int((time.perf_counter() - start_time) * 1000)
        }
    )

    return ChatResponse(
        response=exchange.reply.response,
        conversation_id=exchange.conversation_id,
        suggestions=exchange.reply.suggestions or None
    )


@router.post(
    "/conversations",
    response_model=CreateConversationResponse,
    status_code=201,
    summary="Start a conversation"
)
async def create_conversation(
    payload: CreateConversationRequest,
    service: ConversationService = Depends(get_conversation_service)
):
    conversation_id = await service.start_conversation(payload.user_id)
    return CreateConversationResponse(conversation_id=conversation_id)


@router.get(
    "/conversations/{conversation_id}/messages",
    response_model=ConversationHistoryResponse,
    summary="Get conversation history",
    responses={404: {"description": "Conversation not found"}}
)
async def get_conversation_messages(
    conversation_id: str,
    service: ConversationService = Depends(get_conversation_service)
):
    messages = await service.get_history(conversation_id)
    return ConversationHistoryResponse(
        conversation_id=conversation_id,
        messages=[ChatMessageDTO.from_domain(m) for m in messages]
    )


# Export router for inclusion in main app
assistant_router = router
