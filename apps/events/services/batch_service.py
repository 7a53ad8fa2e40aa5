import logging
from typing import Any

from django.db import transaction

from apps.events.dal.batch_dal import BatchDAL
from apps.events.dal.event_dal import EventDAL
from apps.events.exceptions import BatchNotFoundError
from apps.events.exceptions import EventNotFoundError
from apps.events.models.batch import Batch

logger = logging.getLogger(__name__)


class BatchService:
    """Batches are always managed through their parent event"""

    def __init__(self, dal=None, event_dal=None):
        self.dal = dal or BatchDAL()
        self.event_dal = event_dal or EventDAL()

    def create_batch(self, event_id: int, validated_data: dict[str, Any]) -> Batch:
        event = self._get_event(event_id)

        batch_data = validated_data.copy()
        batch_data['event'] = event
        batch = self.dal.create_batch(batch_data)

        logger.info(f'Batch created: {batch.pk} for event {event_id}')
        return batch

    def get_event_batches(self, event_id: int, active_only: bool = False) -> list[Batch]:
        self._get_event(event_id)
        return self.dal.list_batches_for_event(event_id, active_only=active_only)

    def get_batch(self, batch_id: int) -> Batch:
        batch = self.dal.find_batch(batch_id)
        if batch is None:
            raise BatchNotFoundError(batch_id)
        return batch

    @transaction.atomic
    def update_batch(self, batch_id: int, validated_data: dict[str, Any]) -> Batch:
        batch = self.get_batch(batch_id)
        updated = self.dal.update_batch(batch, validated_data)
        logger.info(f'Batch updated: {batch_id} fields={sorted(validated_data)}')
        return updated

    @transaction.atomic
    def delete_batch(self, batch_id: int) -> bool:
        batch = self.get_batch(batch_id)
        result = self.dal.delete_batch(batch)
        logger.info(f'Batch deleted: {batch_id}')
        return result

    def _get_event(self, event_id: int):
        event = self.event_dal.find_event(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event
