"""
Core Exceptions
===============

Errors raised by the helpdesk modules and translated to HTTP responses by
``helpdesk.shared.api.middleware``:

- ``ResourceNotFoundException`` -> 404
- ``ValidationException`` -> 422
- ``ExternalServiceException`` (request store, conversation store) -> 503
- any other ``ApplicationException`` -> 500
"""

from typing import Optional


class ApplicationException(Exception):
    """Root of every error the service raises on purpose."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details if details is not None else {}


class ValidationException(ApplicationException):
    """Input that passed schema validation but is still unusable."""


class ConfigurationException(ApplicationException):
    """Settings required by the selected backend are missing or invalid."""


class ResourceNotFoundException(ApplicationException):
    """A conversation (or other addressed resource) does not exist."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        where = f" with id '{resource_id}'" if resource_id else ""
        super().__init__(f"{resource_type}{where} not found", details)


class ExternalServiceException(ApplicationException):
    """A collaborator outside this process failed or could not be reached."""

    def __init__(
        self,
        service_name: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.service_name = service_name
        super().__init__(f"{service_name}: {message}", details)


class RequestStoreException(ExternalServiceException):
    """Requests could not be fetched from the store."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__("Request Store", message, details)


class ConversationStoreException(ExternalServiceException):
    """Assistant conversations could not be read or written."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__("Conversation Store", message, details)
