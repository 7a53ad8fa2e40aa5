"""
Domain-specific business exceptions for the Tickets app.

The issuer and the redemption gate report business outcomes as result
values; views translate them into these exceptions so the global handler
produces the HTTP response.
"""

from apps.shared.exceptions import BusinessRuleViolation
from apps.shared.exceptions import ResourceNotFoundError
from apps.shared.exceptions import ServiceUnavailableError
from apps.shared.exceptions import ValidationError


class RegistrationNotFoundError(ResourceNotFoundError):
    """Raised when no registration carries the requested ticketId."""

    def __init__(self, ticket_id: str = None, **kwargs):
        message = f"Ticket '{ticket_id}' not found" if ticket_id else 'Ticket not found'
        super().__init__(message, error_code='ticket_not_found', **kwargs)


class DuplicateRegistrationError(BusinessRuleViolation):
    """Raised when the attendee already holds a ticket for the event."""

    def __init__(self, email: str = None, event_id=None, **kwargs):
        message = 'You have already registered for this event'
        context = kwargs.pop('context', None) or {}
        context.update({'email': email, 'event_id': event_id})
        super().__init__(message, error_code='duplicate_registration', context=context, **kwargs)


class RegistrationValidationError(ValidationError):
    """Raised when registration input fails validation."""

    def __init__(self, field_errors: dict = None, **kwargs):
        super().__init__(
            'Registration data is invalid',
            field_errors=field_errors,
            error_code='registration_invalid',
            **kwargs,
        )


class TicketRenderingError(ServiceUnavailableError):
    """Raised when the PDF ticket cannot be produced."""

    def __init__(self, ticket_id: str = None, **kwargs):
        message = f"Could not render ticket '{ticket_id}'" if ticket_id else 'Could not render ticket'
        super().__init__(message, error_code='ticket_rendering_failed', **kwargs)
