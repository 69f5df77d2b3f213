"""
Assistant Application DTOs
==========================

Pydantic models for the chat API. JSON uses the camelCase names the web
client sends (``userId``, ``conversationId``).
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from helpdesk.assistant.domain import ChatMessage


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ========== Request DTOs ==========

class ChatRequest(_CamelModel):
    """Request model for one chat message."""
    message: str = Field(..., description="User message; empty text gets the default menu")
    user_id: str = Field(..., alias="userId", min_length=1)
    conversation_id: Optional[str] = Field(None, alias="conversationId")


class CreateConversationRequest(_CamelModel):
    """Request model for starting a conversation."""
    user_id: str = Field(..., alias="userId", min_length=1)


# ========== Response DTOs ==========

class ChatResponse(_CamelModel):
    """Response model for one chat message."""
    response: str
    conversation_id: str = Field(..., alias="conversationId")
    suggestions: Optional[List[str]] = None


class CreateConversationResponse(_CamelModel):
    conversation_id: str = Field(..., alias="conversationId")


class ChatMessageDTO(_CamelModel):
    """A stored conversation message."""
    role: Literal["user", "assistant"]
    content: str
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_domain(cls, message: ChatMessage) -> "ChatMessageDTO":
        return cls(role=message.role.value, content=message.content, created_at=message.created_at)


class ConversationHistoryResponse(_CamelModel):
    conversation_id: str = Field(..., alias="conversationId")
    messages: List[ChatMessageDTO]
