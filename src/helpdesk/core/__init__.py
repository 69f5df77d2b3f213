"""
Core Module
===========

Framework-agnostic pieces shared by the requests and assistant modules:
the exception hierarchy.
"""

from helpdesk.core.exceptions import (
    ApplicationException,
    ValidationException,
    ResourceNotFoundException,
    ConfigurationException,
    ExternalServiceException,
    RequestStoreException,
    ConversationStoreException,
)

__all__ = [
    "ApplicationException",
    "ValidationException",
    "ResourceNotFoundException",
    "ConfigurationException",
    "ExternalServiceException",
    "RequestStoreException",
    "ConversationStoreException",
]
