"""
Requests Application Services
=============================

The request store accessor contract and the read-only listing service.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from helpdesk.core import ValidationException
from helpdesk.requests.domain import SupportRequest, split_by_resolution


# ========== Repository Interfaces ==========

class IRequestRepository(ABC):
    """Read access to stored requests."""

    @abstractmethod
    async def get_requests(self, user_id: Optional[str] = None) -> List[SupportRequest]:
        """
        Fetch the requests of ``user_id``, or every request when None.

        Results are ordered by ``created_at`` descending (newest first).
        Store-level failures raise ``RequestStoreException``.
        """


@dataclass
class RequestListing:
    """One view of a user's requests plus the partition sizes."""
    requests: List[SupportRequest]
    active_count: int
    resolved_count: int


class RequestQueryService:
    """Backs the "my requests" page: active/resolved views with search."""

    VIEWS = ("all", "active", "resolved")

    def __init__(self, repository: IRequestRepository):
        self._repository = repository

    async def list_requests(
        self,
        user_id: Optional[str] = None,
        view: str = "all",
        search: Optional[str] = None
    ) -> RequestListing:
        if view not in self.VIEWS:
            raise ValidationException(f"view must be one of {self.VIEWS}")

        requests = await self._repository.get_requests(user_id)
        active, resolved = split_by_resolution(requests)

        selected = {"all": list(requests), "active": active, "resolved": resolved}[view]
        if search:
            selected = [r for r in selected if r.matches(search)]

        return RequestListing(
            requests=selected,
            active_count=len(active),
            resolved_count=len(resolved)
        )
