"""
Domain-specific business exceptions for the Accounts app.

HTTP mapping happens in the global exception handler.
"""

from apps.shared.exceptions import BusinessRuleViolation


class EmailAlreadyExistsError(BusinessRuleViolation):
    """Raised when a registered account already uses the email."""

    def __init__(self, email: str = None, **kwargs):
        message = f"Registered user with email '{email}' already exists" if email else 'Email address is already in use'
        super().__init__(message, error_code='email_already_exists', **kwargs)
