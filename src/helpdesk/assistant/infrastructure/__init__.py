"""
Assistant Infrastructure Layer
==============================

Contains:
- Models: SQLAlchemy ORM models
- Repositories: conversation stores (SQLAlchemy, Supabase)
"""

from helpdesk.assistant.infrastructure.models import ConversationModel, ConversationMessageModel
from helpdesk.assistant.infrastructure.repositories import (
    SQLAlchemyConversationRepository,
    SupabaseConversationRepository,
)

__all__ = [
    "ConversationModel",
    "ConversationMessageModel",
    "SQLAlchemyConversationRepository",
    "SupabaseConversationRepository",
]
