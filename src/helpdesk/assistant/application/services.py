"""
Assistant Application Services
==============================

Orchestrates classifier, request store, knowledge base and formatter into a
single reply per message, and records conversations for the chat endpoint.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from helpdesk.assistant.domain import (
    ChatMessage,
    ClassificationResult,
    Intent,
    IntentClassifier,
    KnowledgeBase,
    MessageRole,
    ResponseFormatter,
    StatusFilter,
)
from helpdesk.assistant.domain.formatter import (
    CREATE_REQUEST_INSTRUCTIONS,
    DEFAULT_RESPONSE,
    NO_PENDING_REQUESTS_MESSAGE,
    NO_REQUESTS_MESSAGE,
    NO_RESOLVED_REQUESTS_MESSAGE,
    STORE_UNAVAILABLE_MESSAGE,
)
from helpdesk.requests.application import IRequestRepository
from helpdesk.requests.domain import SupportRequest, split_by_resolution
from helpdesk.shared.infrastructure.logging import get_logger, log_latency

logger = get_logger(__name__)


SUMMARY_SUGGESTIONS = ("Ver solicitações pendentes", "Ver solicitações resolvidas")
CREATE_REQUEST_SUGGESTIONS = ("Abrir o formulário de Nova Solicitação",)
DEFAULT_SUGGESTIONS = (
    "Problemas de internet",
    "Problemas de email",
    "Problemas de impressora",
    "Minhas solicitações",
    "Como criar uma nova solicitação",
)


# ========== Repository Interfaces ==========

class IConversationRepository(ABC):
    """Append-only storage of assistant conversations."""

    @abstractmethod
    async def create(self, user_id: str) -> str:
        """Start an empty conversation and return its id."""

    @abstractmethod
    async def get_messages(self, conversation_id: str) -> List[ChatMessage]:
        """Messages in the order they were appended."""

    @abstractmethod
    async def append_messages(self, conversation_id: str, messages: Sequence[ChatMessage]) -> None:
        """Append messages after the existing ones."""


# ========== Application Services ==========

@dataclass(frozen=True)
class AssistantReply:
    """Reply text plus what produced it."""
    response: str
    classification: ClassificationResult
    suggestions: List[str] = field(default_factory=list)

    @property
    def intent(self) -> Intent:
        return self.classification.intent


class AssistantService:
    """
    Answers one message at a time.

    The only awaited call is the request store fetch for status queries;
    every other intent is answered from static text. Store failures never
    reach the caller: they become a fixed apology.
    """

    def __init__(
        self,
        request_repository: IRequestRepository,
        knowledge_base: Optional[KnowledgeBase] = None,
        formatter: Optional[ResponseFormatter] = None
    ):
        self._requests = request_repository
        self._knowledge_base = knowledge_base or KnowledgeBase()
        self._classifier = IntentClassifier(self._knowledge_base)
        self._formatter = formatter or ResponseFormatter()

    def classify(self, message: str) -> ClassificationResult:
        return self._classifier.classify(message)

    async def process_message(self, message: str, user_id: Optional[str] = None) -> str:
        """Reply text for ``message``; never empty, never raises on store errors."""
        reply = await self.reply(message, user_id)
        return reply.response

    async def reply(self, message: str, user_id: Optional[str] = None) -> AssistantReply:
        classification = self._classifier.classify(message)

        logger.debug(
            "Message classified",
            extra={
                "intent": classification.intent.value,
                "status_filter": classification.status_filter.value if classification.status_filter else None,
                "category": classification.category
            }
        )

        if classification.intent == Intent.CREATE_REQUEST:
            return AssistantReply(
                CREATE_REQUEST_INSTRUCTIONS, classification, list(CREATE_REQUEST_SUGGESTIONS)
            )

        if classification.intent == Intent.STATUS_QUERY:
            return await self._answer_status_query(classification, user_id)

        if classification.intent == Intent.KNOWLEDGE_MATCH:
            return AssistantReply(
                self._knowledge_base.lookup(classification.category), classification
            )

        return AssistantReply(DEFAULT_RESPONSE, classification, list(DEFAULT_SUGGESTIONS))

    async def _answer_status_query(
        self,
        classification: ClassificationResult,
        user_id: Optional[str]
    ) -> AssistantReply:
        try:
            with log_latency(logger, "request_store_fetch", user_id=user_id):
                requests = await self._requests.get_requests(user_id)
        except Exception as e:
            logger.error(
                "Request store fetch failed",
                extra={"user_id": user_id, "error": str(e), "error_type": type(e).__name__}
            )
            return AssistantReply(STORE_UNAVAILABLE_MESSAGE, classification)

        if not requests:
            return AssistantReply(NO_REQUESTS_MESSAGE, classification, list(CREATE_REQUEST_SUGGESTIONS))

        if classification.status_filter == StatusFilter.PENDING:
            return AssistantReply(self._pending_digest(requests), classification)

        if classification.status_filter == StatusFilter.RESOLVED:
            return AssistantReply(self._resolved_digest(requests), classification)

        return AssistantReply(
            self._formatter.format_summary(requests), classification, list(SUMMARY_SUGGESTIONS)
        )

    def _pending_digest(self, requests: Sequence[SupportRequest]) -> str:
        pending, _ = split_by_resolution(requests)
        if not pending:
            return NO_PENDING_REQUESTS_MESSAGE
        return self._formatter.format_request_list(pending, "pendentes")

    def _resolved_digest(self, requests: Sequence[SupportRequest]) -> str:
        _, resolved = split_by_resolution(requests)
        if not resolved:
            return NO_RESOLVED_REQUESTS_MESSAGE
        return self._formatter.format_request_list(resolved, "resolvidas")


@dataclass(frozen=True)
class ChatExchange:
    """Result of one chat turn."""
    conversation_id: str
    reply: AssistantReply


class ConversationService:
    """
    Chat transport on top of the assistant.

    Creates the conversation on first use and records the user message and
    the assistant reply after it.
    """

    def __init__(self, assistant: AssistantService, conversations: IConversationRepository):
        self._assistant = assistant
        self._conversations = conversations

    async def start_conversation(self, user_id: str) -> str:
        conversation_id = await self._conversations.create(user_id)
        logger.info(
            "Conversation started",
            extra={"user_id": user_id, "conversation_id": conversation_id}
        )
        return conversation_id

    async def get_history(self, conversation_id: str) -> List[ChatMessage]:
        return await self._conversations.get_messages(conversation_id)

    async def handle_chat(
        self,
        message: str,
        user_id: str,
        conversation_id: Optional[str] = None
    ) -> ChatExchange:
        if conversation_id is None:
            conversation_id = await self.start_conversation(user_id)

        user_message = ChatMessage(role=MessageRole.USER, content=message)
        reply = await self._assistant.reply(message, user_id)
        assistant_message = ChatMessage(role=MessageRole.ASSISTANT, content=reply.response)

        await self._conversations.append_messages(conversation_id, [user_message, assistant_message])

        logger.info(
            "Chat message answered",
            extra={
                "user_id": user_id,
                "conversation_id": conversation_id,
                "intent": reply.intent.value
            }
        )
        return ChatExchange(conversation_id=conversation_id, reply=reply)
