"""
Tests for exception to status code mapping and correlation ids.
"""

import pytest

from helpdesk.core import (
    ApplicationException,
    ConfigurationException,
    ConversationStoreException,
    RequestStoreException,
    ResourceNotFoundException,
    ValidationException,
)
from helpdesk.shared.api.middleware import status_code_for


@pytest.mark.parametrize("exc,status_code", [
    (ResourceNotFoundException("Conversation", "c-1"), 404),
    (ValidationException("bad view"), 422),
    (RequestStoreException("timeout"), 503),
    (ConversationStoreException("timeout"), 503),
    (ConfigurationException("missing key"), 500),
    (ApplicationException("boom"), 500),
])
def test_status_code_for(exc, status_code):
    assert status_code_for(exc) == status_code


def test_not_found_message():
    assert ResourceNotFoundException("Conversation", "c-1").message == "Conversation with id 'c-1' not found"


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(async_client):
    response = await async_client.get("/health", headers={"X-Correlation-ID": "abc-123"})
    assert response.headers["X-Correlation-ID"] == "abc-123"
