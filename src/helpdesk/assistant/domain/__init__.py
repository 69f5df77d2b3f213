"""
Assistant Domain Layer
======================

Contains:
- Entities: ClassificationResult, KnowledgeEntry, ChatMessage
- KnowledgeBase: ordered topic catalog
- IntentClassifier: keyword-based intent detection
- ResponseFormatter: request digests and fixed texts

This layer is framework-agnostic and contains pure business logic.
"""

from helpdesk.assistant.domain.entities import (
    Intent,
    StatusFilter,
    ClassificationResult,
    KnowledgeEntry,
    MessageRole,
    ChatMessage,
)
from helpdesk.assistant.domain.knowledge_base import (
    KnowledgeBase,
    DEFAULT_ENTRIES,
    load_knowledge_base,
)
from helpdesk.assistant.domain.classifier import IntentClassifier
from helpdesk.assistant.domain.formatter import ResponseFormatter

__all__ = [
    "Intent",
    "StatusFilter",
    "ClassificationResult",
    "KnowledgeEntry",
    "MessageRole",
    "ChatMessage",
    "KnowledgeBase",
    "DEFAULT_ENTRIES",
    "load_knowledge_base",
    "IntentClassifier",
    "ResponseFormatter",
]
