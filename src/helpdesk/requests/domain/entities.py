"""
Request Domain Entities
=======================

The support request as the assistant reads it. Requests are owned by the
request store; nothing in this service mutates them.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from helpdesk.requests.domain.value_objects import (
    PriorityValue,
    StatusValue,
    TypeValue,
    coerce_priority,
    coerce_status,
    coerce_type,
    is_resolved_status,
    translate_priority,
    translate_status,
    translate_type,
)


def stored_value(value: object) -> str:
    """Storage spelling of an enum field (raw strings are returned as-is)."""
    if isinstance(value, Enum):
        return value.value
    return str(value)


@dataclass(frozen=True)
class SupportRequest:
    """
    A unit of IT support work submitted by a user.

    ``type``, ``priority`` and ``status`` hold the parsed enum member when the
    stored string is known and the raw string otherwise.
    """
    id: str
    requester_name: str
    description: str
    type: TypeValue
    priority: PriorityValue
    status: StatusValue
    created_at: datetime
    deadline_at: Optional[datetime] = None
    user_id: Optional[str] = None
    title: Optional[str] = None

    @classmethod
    def from_stored(
        cls,
        *,
        id: str,
        requester_name: str,
        description: str,
        type: str,
        priority: str,
        status: str,
        created_at: datetime,
        deadline_at: Optional[datetime] = None,
        user_id: Optional[str] = None,
        title: Optional[str] = None
    ) -> "SupportRequest":
        """Build from stored strings, accepting either spelling of each enum."""
        return cls(
            id=id,
            requester_name=requester_name,
            description=description,
            type=coerce_type(type),
            priority=coerce_priority(priority),
            status=coerce_status(status),
            created_at=created_at,
            deadline_at=deadline_at,
            user_id=user_id,
            title=title
        )

    @property
    def is_resolved(self) -> bool:
        """Resolved or closed, in either spelling."""
        return is_resolved_status(self.status)

    @property
    def status_label(self) -> str:
        return translate_status(self.status)

    @property
    def priority_label(self) -> str:
        return translate_priority(self.priority)

    @property
    def type_label(self) -> str:
        return translate_type(self.type)

    def matches(self, query: str) -> bool:
        """Case-insensitive search over description and id."""
        needle = query.lower()
        return needle in (self.description or "").lower() or needle in self.id.lower()


def split_by_resolution(
    requests: Sequence[SupportRequest]
) -> Tuple[List[SupportRequest], List[SupportRequest]]:
    """Partition into (pending, resolved), keeping the input order."""
    pending = [r for r in requests if not r.is_resolved]
    resolved = [r for r in requests if r.is_resolved]
    return pending, resolved
