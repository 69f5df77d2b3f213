"""
Requests Infrastructure Layer
=============================

Contains:
- Models: SQLAlchemy ORM models
- Repositories: request store accessors (SQLAlchemy, Supabase)
"""

from helpdesk.requests.infrastructure.models import RequestModel
from helpdesk.requests.infrastructure.repositories import (
    SQLAlchemyRequestRepository,
    SupabaseRequestRepository,
)

__all__ = [
    "RequestModel",
    "SQLAlchemyRequestRepository",
    "SupabaseRequestRepository",
]
