"""
Events models package
"""

from apps.events.models.batch import Batch
from apps.events.models.batch import BatchQuerySet
from apps.events.models.event import Event
from apps.events.models.event import EventManager
from apps.events.models.event import EventQuerySet

__all__ = [
    'Batch',
    'BatchQuerySet',
    'Event',
    'EventManager',
    'EventQuerySet',
]
