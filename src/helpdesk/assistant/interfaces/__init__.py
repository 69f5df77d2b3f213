"""
Assistant Interfaces Layer
==========================

Contains:
- Controllers: FastAPI route handlers
"""

from helpdesk.assistant.interfaces.controllers import assistant_router

__all__ = ["assistant_router"]
