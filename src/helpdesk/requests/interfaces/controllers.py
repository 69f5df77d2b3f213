"""
Requests Controllers (API Routes)
=================================

Read-only listing of a user's requests. Creating and updating requests
belongs to the request store, not to this service.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from helpdesk.requests.application import (
    IRequestRepository,
    RequestDTO,
    RequestListResponse,
    RequestQueryService,
)
from helpdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/requests", tags=["Requests"])


# ========== Example payloads for Swagger ==========

REQUEST_LIST_RESPONSE_EXAMPLE = {
    "requests": [
        {
            "id": "REQ-0042",
            "user_id": "user-123",
            "requester_name": "Ana Souza",
            "title": "Impressora do financeiro",
            "description": "A impressora não puxa papel",
            "type": "geral",
            "type_label": "Geral",
            "priority": "alta",
            "priority_label": "Alta",
            "status": "em_andamento",
            "status_label": "Em Andamento",
            "is_resolved": False,
            "created_at": "2024-03-05T12:00:00Z",
            "deadline_at": "2024-03-06T12:00:00Z"
        }
    ],
    "view": "active",
    "search": None,
    "active_count": 1,
    "resolved_count": 3
}


# ========== Dependencies ==========

def get_request_repository(request: Request) -> IRequestRepository:
    """Get the request store accessor configured at startup."""
    repository = getattr(request.app.state, "request_repository", None)
    if repository is None:
        raise HTTPException(status_code=503, detail="Request store not configured")
    return repository


def get_request_query_service(
    repository: IRequestRepository = Depends(get_request_repository)
) -> RequestQueryService:
    return RequestQueryService(repository)


# ========== Route Handlers ==========

@router.get(
    "",
    response_model=RequestListResponse,
    summary="List a user's requests",
    description="""
    List requests newest first.

    **Views**:
    - `all` - every request
    - `active` - anything not resolved or closed
    - `resolved` - resolved or closed (either spelling)

    `q` keeps requests whose description or ID contains the text
    (case-insensitive). Counts are computed before the search filter.
    """,
    responses={
        200: {
            "description": "Requests listed",
            "content": {"application/json": {"example": REQUEST_LIST_RESPONSE_EXAMPLE}}
        },
        503: {"description": "Request store not available"}
    }
)
async def list_requests(
    request: Request,
    user_id: Optional[str] = Query(None, description="Owner of the requests; omit for all"),
    view: str = Query("all", pattern="^(all|active|resolved)$"),
    q: Optional[str] = Query(None, description="Search text"),
    service: RequestQueryService = Depends(get_request_query_service)
):
    correlation_id = getattr(request.state, "correlation_id", "unknown")

    listing = await service.list_requests(user_id=user_id, view=view, search=q)

    logger.info(
        "Requests listed",
        extra={
            "correlation_id": correlation_id,
            "user_id": user_id,
            "view": view,
            "returned": len(listing.requests)
        }
    )

    return RequestListResponse(
        requests=[RequestDTO.from_domain(r) for r in listing.requests],
        view=view,
        search=q,
        active_count=listing.active_count,
        resolved_count=listing.resolved_count
    )


# Export router for inclusion in main app
requests_router = router
