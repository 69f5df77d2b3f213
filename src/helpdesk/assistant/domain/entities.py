"""
Assistant Domain Entities
=========================

Intent classification results, knowledge entries and chat messages.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple


class Intent(str, Enum):
    """What an incoming message is asking for."""
    STATUS_QUERY = "status_query"
    CREATE_REQUEST = "create_request"
    KNOWLEDGE_MATCH = "knowledge_match"
    UNCLASSIFIED = "unclassified"


class StatusFilter(str, Enum):
    """Narrowing of a status query."""
    ALL = "all"
    PENDING = "pending"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class ClassificationResult:
    """
    Outcome of classifying one message.

    ``status_filter`` is set only for STATUS_QUERY and ``category`` only for
    KNOWLEDGE_MATCH; use the constructors rather than building it directly.
    """
    intent: Intent
    status_filter: Optional[StatusFilter] = None
    category: Optional[str] = None

    @classmethod
    def status_query(cls, status_filter: StatusFilter) -> "ClassificationResult":
        return cls(Intent.STATUS_QUERY, status_filter=status_filter)

    @classmethod
    def create_request(cls) -> "ClassificationResult":
        return cls(Intent.CREATE_REQUEST)

    @classmethod
    def knowledge_match(cls, category: str) -> "ClassificationResult":
        return cls(Intent.KNOWLEDGE_MATCH, category=category)

    @classmethod
    def unclassified(cls) -> "ClassificationResult":
        return cls(Intent.UNCLASSIFIED)


@dataclass(frozen=True)
class KnowledgeEntry:
    """
    One knowledge base topic.

    Keywords are stored lowercased; any keyword appearing in the lowercased
    message selects the entry. The first response is the one returned.
    """
    category: str
    keywords: Tuple[str, ...]
    responses: Tuple[str, ...]

    def __post_init__(self):
        if not self.keywords:
            raise ValueError(f"Knowledge entry '{self.category}' has no keywords")
        if not self.responses:
            raise ValueError(f"Knowledge entry '{self.category}' has no responses")
        object.__setattr__(self, "keywords", tuple(keyword.lower() for keyword in self.keywords))

    @property
    def response(self) -> str:
        return self.responses[0]

    def matches(self, lowered_message: str) -> bool:
        return any(keyword in lowered_message for keyword in self.keywords)


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    """A single message in an assistant conversation."""
    role: MessageRole
    content: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "role": self.role.value,
            "content": self.content,
            "created_at": self.created_at.isoformat()
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ChatMessage":
        created_at = data.get("created_at") or data.get("timestamp")
        return cls(
            role=MessageRole(data["role"]),
            content=data["content"],
            created_at=datetime.fromisoformat(created_at) if created_at else datetime.now(timezone.utc)
        )
