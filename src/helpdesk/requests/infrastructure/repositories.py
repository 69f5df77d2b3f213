"""
Requests Infrastructure Repositories
====================================

Request store accessors: SQLAlchemy and Supabase (PostgREST).
"""

from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy import select

from helpdesk.config import settings
from helpdesk.core import RequestStoreException
from helpdesk.infrastructure.database import DATABASE_ERRORS, get_session_context
from helpdesk.infrastructure.supabase import SupabaseException, SupabaseRestClient
from helpdesk.requests.application import IRequestRepository, StoredRequestRow
from helpdesk.requests.domain import SupportRequest
from helpdesk.requests.infrastructure.models import RequestModel


def _to_domain(model: RequestModel) -> SupportRequest:
    return SupportRequest.from_stored(
        id=model.id,
        user_id=model.user_id,
        requester_name=model.requester_name,
        title=model.title,
        description=model.description,
        type=model.type,
        priority=model.priority,
        status=model.status,
        created_at=model.created_at,
        deadline_at=model.deadline_at
    )


class SQLAlchemyRequestRepository(IRequestRepository):
    """
    SQLAlchemy implementation of the request store accessor.

    Opens a short-lived session per call, so one instance can be shared by
    concurrent requests.
    """

    async def get_requests(self, user_id: Optional[str] = None) -> List[SupportRequest]:
        stmt = select(RequestModel).order_by(RequestModel.created_at.desc())
        if user_id is not None:
            stmt = stmt.where(RequestModel.user_id == user_id)

        try:
            async with get_session_context() as session:
                result = await session.execute(stmt)
                return [_to_domain(model) for model in result.scalars().all()]
        except DATABASE_ERRORS as e:
            raise RequestStoreException(f"Failed to load requests: {e}") from e


class SupabaseRequestRepository(IRequestRepository):
    """Request store accessor reading the Supabase ``requests`` table."""

    def __init__(self, client: SupabaseRestClient, table: Optional[str] = None):
        self._client = client
        self._table = table or settings.supabase_requests_table

    async def get_requests(self, user_id: Optional[str] = None) -> List[SupportRequest]:
        filters = {"user_id": user_id} if user_id is not None else None
        try:
            rows = await self._client.select(
                self._table, filters=filters, order="created_at.desc"
            )
            return [StoredRequestRow.model_validate(row).to_domain() for row in rows]
        except SupabaseException as e:
            raise RequestStoreException(e.message, e.details) from e
        except ValidationError as e:
            raise RequestStoreException(f"Malformed request row: {e}") from e
