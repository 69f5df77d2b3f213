"""
Requests Domain Layer
=====================

Contains:
- Value Objects: status/priority/type enums and their display labels
- Entities: SupportRequest

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from helpdesk.requests.domain.entities import SupportRequest, split_by_resolution, stored_value
from helpdesk.requests.domain.value_objects import (
    RequestStatus,
    RequestPriority,
    RequestType,
    STATUS_LABELS,
    PRIORITY_LABELS,
    TYPE_LABELS,
    RESOLVED_STATUSES,
    translate_status,
    translate_priority,
    translate_type,
    is_resolved_status,
)

__all__ = [
    # Entities
    "SupportRequest",
    "stored_value",
    "split_by_resolution",
    # Value Objects
    "RequestStatus",
    "RequestPriority",
    "RequestType",
    "STATUS_LABELS",
    "PRIORITY_LABELS",
    "TYPE_LABELS",
    "RESOLVED_STATUSES",
    "translate_status",
    "translate_priority",
    "translate_type",
    "is_resolved_status",
]
