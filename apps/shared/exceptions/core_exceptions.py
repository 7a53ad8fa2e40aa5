"""
Core business exception hierarchy for the ticketing service.

These exceptions describe BUSINESS failures, not HTTP responses.
The DAL translates Django/database errors into them, services raise them,
and the API exception handler maps them to HTTP status codes.
"""

import logging

logger = logging.getLogger(__name__)


class AppError(Exception):
    """
    Base class for all business logic errors in the application.

    Carries a human readable message, a stable machine readable error code
    and an optional context dict used for logging and error details.
    """

    def __init__(self, message: str, error_code: str = None, context: dict = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def __str__(self) -> str:
        return self.message

    def get_context(self) -> dict:
        """Get additional error context for logging/debugging"""
        return self.context


class ResourceNotFoundError(AppError):
    """
    A requested resource doesn't exist (event, batch, ticket, user).

    HTTP Mapping: 404 NOT FOUND
    """


class BusinessRuleViolation(AppError):
    """
    The action conflicts with a business rule, e.g. a second ticket for the
    same attendee and event.

    HTTP Mapping: 409 CONFLICT (400 when the error code mentions validation)
    """


class ValidationError(AppError):
    """
    Input data failed business validation.

    HTTP Mapping: 400 BAD REQUEST
    """

    def __init__(self, message: str, field_errors: dict = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field_errors = field_errors or {}


class ServiceUnavailableError(AppError):
    """
    An infrastructure dependency failed: database, mail server, PDF engine.

    HTTP Mapping: 503 SERVICE UNAVAILABLE
    """
