"""
Assistant Infrastructure Repositories
=====================================

Conversation stores: SQLAlchemy tables or a Supabase ``ai_conversations``
row holding the messages as a JSON array.
"""

from datetime import datetime, timezone
from typing import List, Optional, Sequence
from uuid import UUID, uuid4

from sqlalchemy import func, select

from helpdesk.assistant.application import IConversationRepository
from helpdesk.assistant.domain import ChatMessage, MessageRole
from helpdesk.assistant.infrastructure.models import ConversationMessageModel, ConversationModel
from helpdesk.config import settings
from helpdesk.core import ConversationStoreException, ResourceNotFoundException
from helpdesk.infrastructure.database import DATABASE_ERRORS, get_session_context
from helpdesk.infrastructure.supabase import SupabaseException, SupabaseRestClient


def _parse_uuid(conversation_id: str) -> UUID:
    try:
        return UUID(conversation_id)
    except ValueError:
        raise ResourceNotFoundException("Conversation", conversation_id)


class SQLAlchemyConversationRepository(IConversationRepository):
    """SQLAlchemy implementation; one session per call."""

    async def create(self, user_id: str) -> str:
        model = ConversationModel(id=uuid4(), user_id=user_id)
        try:
            async with get_session_context() as session:
                session.add(model)
                await session.flush()
        except DATABASE_ERRORS as e:
            raise ConversationStoreException(f"Failed to create conversation: {e}") from e
        return str(model.id)

    async def get_messages(self, conversation_id: str) -> List[ChatMessage]:
        conversation_uuid = _parse_uuid(conversation_id)
        try:
            async with get_session_context() as session:
                if await session.get(ConversationModel, conversation_uuid) is None:
                    raise ResourceNotFoundException("Conversation", conversation_id)

                stmt = (
                    select(ConversationMessageModel)
                    .where(ConversationMessageModel.conversation_id == conversation_uuid)
                    .order_by(ConversationMessageModel.position)
                )
                result = await session.execute(stmt)
                return [
                    ChatMessage(
                        role=MessageRole(row.role),
                        content=row.content,
                        created_at=row.created_at
                    )
                    for row in result.scalars().all()
                ]
        except DATABASE_ERRORS as e:
            raise ConversationStoreException(f"Failed to load conversation: {e}") from e

    async def append_messages(self, conversation_id: str, messages: Sequence[ChatMessage]) -> None:
        conversation_uuid = _parse_uuid(conversation_id)
        try:
            async with get_session_context() as session:
                conversation = await session.get(ConversationModel, conversation_uuid)
                if conversation is None:
                    raise ResourceNotFoundException("Conversation", conversation_id)

                stmt = select(func.count(ConversationMessageModel.id)).where(
                    ConversationMessageModel.conversation_id == conversation_uuid
                )
                next_position = (await session.execute(stmt)).scalar_one()

                for offset, message in enumerate(messages):
                    session.add(ConversationMessageModel(
                        id=uuid4(),
                        conversation_id=conversation_uuid,
                        position=next_position + offset,
                        role=message.role.value,
                        content=message.content,
                        created_at=message.created_at
                    ))

                conversation.last_message_at = datetime.now(timezone.utc)
                await session.flush()
        except DATABASE_ERRORS as e:
            raise ConversationStoreException(f"Failed to append messages: {e}") from e


class SupabaseConversationRepository(IConversationRepository):
    """
    Supabase implementation: one row per conversation, messages in the
    ``conversation_data`` JSON array.

    Appends read the array and write it back, so two concurrent appends to
    the same conversation can lose one of them.
    """

    def __init__(self, client: SupabaseRestClient, table: Optional[str] = None):
        self._client = client
        self._table = table or settings.supabase_conversations_table

    async def create(self, user_id: str) -> str:
        try:
            row = await self._client.insert(self._table, {
                "user_id": user_id,
                "conversation_data": [],
                "last_message_at": datetime.now(timezone.utc).isoformat()
            })
        except SupabaseException as e:
            raise ConversationStoreException(e.message, e.details) from e
        return str(row["id"])

    async def _load_data(self, conversation_id: str) -> list:
        try:
            rows = await self._client.select(
                self._table,
                filters={"id": conversation_id},
                columns="conversation_data"
            )
        except SupabaseException as e:
            raise ConversationStoreException(e.message, e.details) from e

        if not rows:
            raise ResourceNotFoundException("Conversation", conversation_id)

        data = rows[0].get("conversation_data")
        return data if isinstance(data, list) else []

    async def get_messages(self, conversation_id: str) -> List[ChatMessage]:
        data = await self._load_data(conversation_id)
        try:
            return [ChatMessage.from_dict(item) for item in data]
        except (KeyError, ValueError) as e:
            raise ConversationStoreException(f"Malformed conversation data: {e}") from e

    async def append_messages(self, conversation_id: str, messages: Sequence[ChatMessage]) -> None:
        data = await self._load_data(conversation_id)
        data.extend(message.to_dict() for message in messages)
        try:
            await self._client.update(
                self._table,
                filters={"id": conversation_id},
                values={
                    "conversation_data": data,
                    "last_message_at": datetime.now(timezone.utc).isoformat()
                }
            )
        except SupabaseException as e:
            raise ConversationStoreException(e.message, e.details) from e
