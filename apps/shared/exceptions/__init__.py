"""
Shared exceptions for the ticketing service.

Import business exceptions from here; HTTP mapping lives in api_handler.py.
"""

from apps.shared.exceptions.core_exceptions import AppError
from apps.shared.exceptions.core_exceptions import BusinessRuleViolation
from apps.shared.exceptions.core_exceptions import ResourceNotFoundError
from apps.shared.exceptions.core_exceptions import ServiceUnavailableError
from apps.shared.exceptions.core_exceptions import ValidationError

__all__ = [
    'AppError',
    'BusinessRuleViolation',
    'ResourceNotFoundError',
    'ServiceUnavailableError',
    'ValidationError',
]
