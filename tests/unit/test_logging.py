"""
Tests for structured logging.
"""

import json
import logging

from helpdesk.shared.infrastructure.logging import CustomJsonFormatter


def format_record(formatter: CustomJsonFormatter, **extra) -> dict:
    record = logging.LogRecord("helpdesk.test", logging.INFO, __file__, 1, "Requests fetched", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return json.loads(formatter.format(record))


class TestCustomJsonFormatter:

    def test_adds_context_fields(self):
        formatter = CustomJsonFormatter("%(name)s %(levelname)s %(message)s", environment="test")

        data = format_record(formatter, correlation_id="abc-123", user_id="user-1")

        assert data["message"] == "Requests fetched"
        assert data["environment"] == "test"
        assert data["correlation_id"] == "abc-123"
        assert data["user_id"] == "user-1"
        assert "timestamp" in data

    def test_redacts_secrets(self):
        formatter = CustomJsonFormatter("%(message)s")

        data = format_record(formatter, supabase_api_key="secret", access_token="t0k3n", count=3)

        assert data["supabase_api_key"] == "***REDACTED***"
        assert data["access_token"] == "***REDACTED***"
        assert data["count"] == 3
