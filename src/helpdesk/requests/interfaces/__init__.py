"""
Requests Interfaces Layer
=========================

Contains:
- Controllers: FastAPI route handlers
"""

from helpdesk.requests.interfaces.controllers import requests_router

__all__ = ["requests_router"]
