"""
Tests for the "my requests" listing.
"""

import pytest

from helpdesk.core import ValidationException
from helpdesk.requests.application import RequestQueryService
from tests.conftest import FakeRequestRepository


@pytest.fixture
def service(make_request) -> RequestQueryService:
    return RequestQueryService(FakeRequestRepository([
        make_request(status="nova", request_id="REQ-1", description="Impressora travada"),
        make_request(status="em_andamento", request_id="REQ-2", description="VPN"),
        make_request(status="fechada", request_id="REQ-3", description="Impressora sem toner"),
        make_request(status="resolved", request_id="REQ-4", description="Teclado"),
    ]))


class TestRequestQueryService:

    @pytest.mark.asyncio
    async def test_all(self, service):
        listing = await service.list_requests("user-1")

        assert [r.id for r in listing.requests] == ["REQ-1", "REQ-2", "REQ-3", "REQ-4"]
        assert listing.active_count == 2
        assert listing.resolved_count == 2

    @pytest.mark.asyncio
    async def test_active_view(self, service):
        listing = await service.list_requests("user-1", view="active")
        assert [r.id for r in listing.requests] == ["REQ-1", "REQ-2"]

    @pytest.mark.asyncio
    async def test_search_by_id(self, service):
        listing = await service.list_requests("user-1", view="resolved", search="req-4")

        assert [r.id for r in listing.requests] == ["REQ-4"]
        assert listing.resolved_count == 2

    @pytest.mark.asyncio
    async def test_invalid_view(self, service):
        with pytest.raises(ValidationException):
            await service.list_requests("user-1", view="archived")
