from typing import Any

from django.db.models import QuerySet

from apps.events.models.event import Event
from apps.shared.decorators.database import handle_db_errors


class EventDAL:
    """Data Access Layer for Event model operations only"""

    @handle_db_errors(operation_type='create', model_name='Event')
    def create_event(self, event_data: dict[str, Any]) -> Event:
        return Event.objects.create(**event_data)

    @handle_db_errors(operation_type='read', model_name='Event')
    def find_event(self, event_id) -> Event | None:
        """Get event by id, None when missing"""
        return Event.objects.filter(pk=event_id).first()

    def get_events_queryset(self, search: str = '', active_only: bool = False) -> QuerySet[Event]:
        queryset = Event.objects.active() if active_only else Event.objects.all()
        return queryset.search(search).with_registration_counts().order_by('date', 'name')

    @handle_db_errors(operation_type='read', model_name='Event')
    def list_active_events(self) -> list[Event]:
        return list(Event.objects.active().order_by('date', 'name'))

    @handle_db_errors(operation_type='update', model_name='Event')
    def update_event(self, event: Event, validated_data: dict[str, Any]) -> Event:
        for field, value in validated_data.items():
            setattr(event, field, value)
        event.save()
        return event

    @handle_db_errors(operation_type='delete', model_name='Event')
    def delete_event(self, event: Event) -> bool:
        event.delete()
        return True
