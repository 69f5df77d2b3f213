"""
Pytest configuration and fixtures.
"""

from datetime import datetime, timedelta
from typing import AsyncGenerator, Dict, List, Optional, Sequence
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from helpdesk.assistant.application import AssistantService, IConversationRepository
from helpdesk.assistant.domain import ChatMessage, KnowledgeBase
from helpdesk.core import RequestStoreException, ResourceNotFoundException
from helpdesk.requests.application import IRequestRepository
from helpdesk.requests.domain import SupportRequest


class FakeRequestRepository(IRequestRepository):
    """In-memory request store that records every fetch."""

    def __init__(self, requests: Sequence[SupportRequest] = (), error: Optional[Exception] = None):
        self.requests = list(requests)
        self.error = error
        self.calls: List[Optional[str]] = []

    async def get_requests(self, user_id: Optional[str] = None) -> List[SupportRequest]:
        self.calls.append(user_id)
        if self.error is not None:
            raise self.error
        if user_id is None:
            return list(self.requests)
        return [r for r in self.requests if r.user_id == user_id]


class FakeConversationRepository(IConversationRepository):
    """In-memory conversation store."""

    def __init__(self):
        self.conversations: Dict[str, List[ChatMessage]] = {}
        self.owners: Dict[str, str] = {}

    async def create(self, user_id: str) -> str:
        conversation_id = str(uuid4())
        self.conversations[conversation_id] = []
        self.owners[conversation_id] = user_id
        return conversation_id

    async def get_messages(self, conversation_id: str) -> List[ChatMessage]:
        if conversation_id not in self.conversations:
            raise ResourceNotFoundException("Conversation", conversation_id)
        return list(self.conversations[conversation_id])

    async def append_messages(self, conversation_id: str, messages: Sequence[ChatMessage]) -> None:
        if conversation_id not in self.conversations:
            raise ResourceNotFoundException("Conversation", conversation_id)
        self.conversations[conversation_id].extend(messages)


@pytest.fixture
def make_request():
    """Factory for SupportRequest built from stored strings."""
    counter = {"n": 0}

    def _make(
        status: str = "nova",
        priority: str = "media",
        title: Optional[str] = "Problema no computador",
        user_id: str = "user-1",
        created_at: Optional[datetime] = None,
        request_id: Optional[str] = None,
        description: str = "Descrição do problema",
        request_type: str = "geral",
    ) -> SupportRequest:
        counter["n"] += 1
        return SupportRequest.from_stored(
            id=request_id or f"REQ-{counter['n']:04d}",
            user_id=user_id,
            requester_name="Ana Souza",
            title=title,
            description=description,
            type=request_type,
            priority=priority,
            status=status,
            created_at=created_at or datetime(2024, 3, 5, 12, 0) - timedelta(days=counter["n"]),
            deadline_at=datetime(2024, 3, 10, 18, 0)
        )

    return _make


@pytest.fixture
def request_store() -> FakeRequestRepository:
    return FakeRequestRepository()


@pytest.fixture
def failing_request_store() -> FakeRequestRepository:
    return FakeRequestRepository(error=RequestStoreException("connection refused"))


@pytest.fixture
def conversation_store() -> FakeConversationRepository:
    return FakeConversationRepository()


@pytest.fixture
def assistant(request_store: FakeRequestRepository) -> AssistantService:
    return AssistantService(request_store)


@pytest_asyncio.fixture
async def async_client(
    request_store: FakeRequestRepository,
    conversation_store: FakeConversationRepository
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app with in-memory stores (lifespan not run)."""
    from helpdesk.main import app

    app.state.request_repository = request_store
    app.state.conversation_repository = conversation_store
    app.state.knowledge_base = KnowledgeBase()
    app.state.assistant_service = AssistantService(request_store, knowledge_base=app.state.knowledge_base)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    for name in ("request_repository", "conversation_repository", "knowledge_base", "assistant_service"):
        delattr(app.state, name)
