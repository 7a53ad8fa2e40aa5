"""
Domain-specific business exceptions for the Events app.

These are BUSINESS exceptions; HTTP mapping happens in the global
exception handler.
"""

from apps.shared.exceptions import ResourceNotFoundError


class EventNotFoundError(ResourceNotFoundError):
    """Raised when requested event does not exist."""

    def __init__(self, event_identifier=None, **kwargs):
        message = 'Event not found'
        if event_identifier is not None:
            message = f"Event '{event_identifier}' not found"
        super().__init__(message, error_code='event_not_found', **kwargs)


class BatchNotFoundError(ResourceNotFoundError):
    """Raised when requested batch does not exist (or belongs to another event)."""

    def __init__(self, batch_identifier=None, **kwargs):
        message = 'Batch not found'
        if batch_identifier is not None:
            message = f"Batch '{batch_identifier}' not found"
        super().__init__(message, error_code='batch_not_found', **kwargs)
