"""
Tickets models package
"""

from apps.tickets.models.registration import Registration
from apps.tickets.models.registration import RegistrationQuerySet

__all__ = [
    'Registration',
    'RegistrationQuerySet',
]
