"""
Assistant Application Layer
===========================

Contains:
- Services: AssistantService (message -> reply), ConversationService
- DTOs: Data transfer objects for API serialization
"""

from helpdesk.assistant.application.dto import (
    ChatRequest,
    ChatResponse,
    CreateConversationRequest,
    CreateConversationResponse,
    ChatMessageDTO,
    ConversationHistoryResponse,
)
from helpdesk.assistant.application.services import (
    AssistantService,
    AssistantReply,
    ConversationService,
    ChatExchange,
    IConversationRepository,
)

__all__ = [
    # DTOs
    "ChatRequest",
    "ChatResponse",
    "CreateConversationRequest",
    "CreateConversationResponse",
    "ChatMessageDTO",
    "ConversationHistoryResponse",
    # Services
    "AssistantService",
    "AssistantReply",
    "ConversationService",
    "ChatExchange",
    # Repository Interfaces
    "IConversationRepository",
]
