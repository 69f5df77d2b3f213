"""
Requests Application DTOs
=========================

Pydantic models for the requests API and for rows read from the stores.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from helpdesk.requests.domain import SupportRequest, stored_value


RequestViewStr = Literal["all", "active", "resolved"]


# ========== Store DTOs ==========

class StoredRequestRow(BaseModel):
    """A request row as returned by the Supabase REST API."""
    id: str
    user_id: Optional[str] = None
    requester_name: str = ""
    title: Optional[str] = None
    description: str = ""
    type: str
    priority: str
    status: str
    created_at: datetime
    deadline_at: Optional[datetime] = None

    def to_domain(self) -> SupportRequest:
        """Convert to domain entity."""
        return SupportRequest.from_stored(
            id=self.id,
            user_id=self.user_id,
            requester_name=self.requester_name,
            title=self.title,
            description=self.description,
            type=self.type,
            priority=self.priority,
            status=self.status,
            created_at=self.created_at,
            deadline_at=self.deadline_at
        )


# ========== Response DTOs ==========

class RequestDTO(BaseModel):
    """A request with its canonical display labels."""
    id: str
    user_id: Optional[str]
    requester_name: str
    title: Optional[str]
    description: str
    type: str
    type_label: str
    priority: str
    priority_label: str
    status: str
    status_label: str
    is_resolved: bool
    created_at: datetime
    deadline_at: Optional[datetime]

    @classmethod
    def from_domain(cls, request: SupportRequest) -> "RequestDTO":
        """Create from domain entity."""
        return cls(
            id=request.id,
            user_id=request.user_id,
            requester_name=request.requester_name,
            title=request.title,
            description=request.description,
            type=stored_value(request.type),
            type_label=request.type_label,
            priority=stored_value(request.priority),
            priority_label=request.priority_label,
            status=stored_value(request.status),
            status_label=request.status_label,
            is_resolved=request.is_resolved,
            created_at=request.created_at,
            deadline_at=request.deadline_at
        )


class RequestListResponse(BaseModel):
    """Response model for the "my requests" listing."""
    requests: List[RequestDTO]
    view: RequestViewStr
    search: Optional[str] = None
    active_count: int = Field(..., description="Unresolved requests before search filtering")
    resolved_count: int = Field(..., description="Resolved or closed requests before search filtering")
