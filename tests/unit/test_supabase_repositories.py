"""
Tests for the Supabase-backed stores, against a mocked PostgREST API.
"""

import json
from typing import Callable, List

import httpx
import pytest

from helpdesk.assistant.domain import ChatMessage, MessageRole
from helpdesk.assistant.infrastructure import SupabaseConversationRepository
from helpdesk.core import (
    ConfigurationException,
    ConversationStoreException,
    RequestStoreException,
    ResourceNotFoundException,
)
from helpdesk.infrastructure.supabase import SupabaseException, SupabaseRestClient
from helpdesk.requests.domain import RequestStatus
from helpdesk.requests.infrastructure import SupabaseRequestRepository

SUPABASE_URL = "https://project.supabase.co"


def make_client(handler: Callable[[httpx.Request], httpx.Response], seen: List[httpx.Request]) -> SupabaseRestClient:
    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    return SupabaseRestClient(
        url=SUPABASE_URL,
        api_key="anon-key",
        transport=httpx.MockTransport(record)
    )


REQUEST_ROWS = [
    {
        "id": "REQ-2",
        "user_id": "user-1",
        "requester_name": "Ana",
        "title": "Impressora",
        "description": "Não imprime",
        "type": "geral",
        "priority": "alta",
        "status": "resolvida",
        "created_at": "2024-03-06T10:00:00+00:00",
        "deadline_at": None,
    },
    {
        "id": "REQ-1",
        "user_id": "user-1",
        "requester_name": "Ana",
        "title": None,
        "description": "Sem internet",
        "type": "sistemas",
        "priority": "low",
        "status": "in_progress",
        "created_at": "2024-03-05T10:00:00+00:00",
        "deadline_at": "2024-03-07T10:00:00+00:00",
    },
]


class TestSupabaseRestClient:

    def test_requires_url_and_key(self, monkeypatch):
        from helpdesk.config import settings

        monkeypatch.setattr(settings, "supabase_url", None)
        monkeypatch.setattr(settings, "supabase_api_key", None)

        with pytest.raises(ConfigurationException):
            SupabaseRestClient()

    @pytest.mark.asyncio
    async def test_select_sends_filters_and_auth_headers(self):
        seen: List[httpx.Request] = []
        client = make_client(lambda request: httpx.Response(200, json=[]), seen)

        await client.select("requests", filters={"user_id": "user-1"}, order="created_at.desc", limit=10)
        await client.close()

        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/rest/v1/requests"
        assert request.url.params["user_id"] == "eq.user-1"
        assert request.url.params["order"] == "created_at.desc"
        assert request.url.params["limit"] == "10"
        assert request.url.params["select"] == "*"
        assert request.headers["apikey"] == "anon-key"
        assert request.headers["authorization"] == "Bearer anon-key"

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        client = make_client(lambda request: httpx.Response(500, text="boom"), [])

        with pytest.raises(SupabaseException) as exc_info:
            await client.select("requests")

        assert exc_info.value.details["status_code"] == 500

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        client = make_client(fail, [])

        with pytest.raises(SupabaseException):
            await client.select("requests")


class TestSupabaseRequestRepository:

    @pytest.mark.asyncio
    async def test_get_requests_for_user(self):
        seen: List[httpx.Request] = []
        client = make_client(lambda request: httpx.Response(200, json=REQUEST_ROWS), seen)

        requests = await SupabaseRequestRepository(client, table="requests").get_requests("user-1")

        assert [r.id for r in requests] == ["REQ-2", "REQ-1"]
        assert requests[0].status is RequestStatus.RESOLVED
        assert requests[0].status_label == "Resolvida"
        assert requests[1].priority_label == "Baixa"
        assert seen[0].url.params["user_id"] == "eq.user-1"
        assert seen[0].url.params["order"] == "created_at.desc"

    @pytest.mark.asyncio
    async def test_get_all_requests_has_no_user_filter(self):
        seen: List[httpx.Request] = []
        client = make_client(lambda request: httpx.Response(200, json=[]), seen)

        assert await SupabaseRequestRepository(client, table="requests").get_requests() == []
        assert "user_id" not in seen[0].url.params

    @pytest.mark.asyncio
    async def test_store_error_is_wrapped(self):
        client = make_client(lambda request: httpx.Response(503), [])

        with pytest.raises(RequestStoreException):
            await SupabaseRequestRepository(client, table="requests").get_requests("user-1")

    @pytest.mark.asyncio
    async def test_malformed_row_is_wrapped(self):
        client = make_client(lambda request: httpx.Response(200, json=[{"id": "REQ-1"}]), [])

        with pytest.raises(RequestStoreException):
            await SupabaseRequestRepository(client, table="requests").get_requests("user-1")


class FakeConversationTable:
    """Single-table PostgREST stand-in for ``ai_conversations``."""

    def __init__(self):
        self.rows = {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            row = json.loads(request.content)
            row["id"] = f"conv-{len(self.rows) + 1}"
            self.rows[row["id"]] = row
            return httpx.Response(201, json=[row])

        conversation_id = request.url.params.get("id", "").removeprefix("eq.")
        row = self.rows.get(conversation_id)

        if request.method == "GET":
            if row is None:
                return httpx.Response(200, json=[])
            return httpx.Response(200, json=[{"conversation_data": row["conversation_data"]}])

        if request.method == "PATCH":
            row.update(json.loads(request.content))
            return httpx.Response(200, json=[row])

        return httpx.Response(405)


class TestSupabaseConversationRepository:

    @pytest.mark.asyncio
    async def test_create_append_and_read(self):
        table = FakeConversationTable()
        repository = SupabaseConversationRepository(make_client(table, []), table="ai_conversations")

        conversation_id = await repository.create("user-1")
        await repository.append_messages(conversation_id, [
            ChatMessage(role=MessageRole.USER, content="status"),
            ChatMessage(role=MessageRole.ASSISTANT, content="Resumo"),
        ])
        await repository.append_messages(conversation_id, [
            ChatMessage(role=MessageRole.USER, content="obrigado"),
        ])

        messages = await repository.get_messages(conversation_id)

        assert conversation_id == "conv-1"
        assert table.rows["conv-1"]["user_id"] == "user-1"
        assert [m.content for m in messages] == ["status", "Resumo", "obrigado"]
        assert messages[1].role is MessageRole.ASSISTANT

    @pytest.mark.asyncio
    async def test_missing_conversation(self):
        repository = SupabaseConversationRepository(
            make_client(FakeConversationTable(), []), table="ai_conversations"
        )

        with pytest.raises(ResourceNotFoundException):
            await repository.get_messages("conv-404")

    @pytest.mark.asyncio
    async def test_store_error_is_wrapped(self):
        repository = SupabaseConversationRepository(
            make_client(lambda request: httpx.Response(500), []), table="ai_conversations"
        )

        with pytest.raises(ConversationStoreException):
            await repository.create("user-1")

    @pytest.mark.asyncio
    async def test_legacy_timestamp_field(self):
        table = FakeConversationTable()
        table.rows["conv-9"] = {
            "id": "conv-9",
            "conversation_data": [
                {"role": "user", "content": "oi", "timestamp": "2024-03-05T10:00:00+00:00"}
            ]
        }
        repository = SupabaseConversationRepository(make_client(table, []), table="ai_conversations")

        messages = await repository.get_messages("conv-9")

        assert messages[0].created_at.year == 2024
