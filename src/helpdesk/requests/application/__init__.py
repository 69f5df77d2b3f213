"""
Requests Application Layer
==========================

Contains:
- Services: store accessor contract and listing service
- DTOs: Data transfer objects for API serialization
"""

from helpdesk.requests.application.dto import (
    StoredRequestRow,
    RequestDTO,
    RequestListResponse,
)
from helpdesk.requests.application.services import (
    IRequestRepository,
    RequestQueryService,
    RequestListing,
)

__all__ = [
    # DTOs
    "StoredRequestRow",
    "RequestDTO",
    "RequestListResponse",
    # Services
    "RequestQueryService",
    "RequestListing",
    # Repository Interfaces
    "IRequestRepository",
]
