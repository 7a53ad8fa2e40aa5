"""Events services package."""

from apps.events.services.batch_service import BatchService
from apps.events.services.event_service import EventService

__all__ = [
    'BatchService',
    'EventService',
]
