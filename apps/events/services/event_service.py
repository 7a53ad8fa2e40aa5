import logging
from typing import Any

from django.db import transaction

from apps.events.dal.event_dal import EventDAL
from apps.events.exceptions import EventNotFoundError
from apps.events.models.event import Event
from apps.shared.cache.cache_manager import CacheManager
from apps.shared.utils.paginator import ServicePaginator

logger = logging.getLogger(__name__)


class EventService:
    """Service for event business logic operations"""

    def __init__(self, dal=None, cache_manager=None):
        self.dal = dal or EventDAL()
        self.cache_manager = cache_manager or CacheManager()
        self.paginator = ServicePaginator()

    def create_event(self, validated_data: dict[str, Any]) -> Event:
        event = self.dal.create_event(validated_data)
        logger.info(f'Event created: {event.pk} ({event.name})')
        return event

    def get_event(self, event_id: int) -> Event:
        event = self.dal.find_event(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def get_events_list(self, filters: dict[str, Any]) -> dict[str, Any]:
        page = filters.get('page', 1)
        page_size = min(filters.get('page_size', 20), 100)
        search = (filters.get('search') or '').strip()
        active_only = filters.get('active_only', False)

        queryset = self.dal.get_events_queryset(search=search, active_only=active_only)
        return self.paginator.paginate(queryset, page, page_size)

    def get_active_events(self) -> list[Event]:
        """Events open for registration, ordered by date"""
        return self.dal.list_active_events()

    @transaction.atomic
    def update_event(self, event_id: int, validated_data: dict[str, Any]) -> Event:
        event = self.get_event(event_id)
        updated_event = self.dal.update_event(event, validated_data)
        logger.info(f'Event updated: {event_id} fields={sorted(validated_data)}')
        return updated_event

    @transaction.atomic
    def delete_event(self, event_id: int) -> bool:
        """Delete event; its batches and registrations cascade"""
        event = self.get_event(event_id)
        result = self.dal.delete_event(event)

        transaction.on_commit(lambda: self._invalidate_caches(event_id))
        logger.info(f'Event deleted: {event_id}')
        return result

    def _invalidate_caches(self, event_id: int) -> None:
        try:
            self.cache_manager.invalidate_ticket_stats(event_id)
        except Exception as e:
            logger.warning(f'Cache invalidation failed for event {event_id}: {e}')
