from typing import Any

from apps.events.models.batch import Batch
from apps.shared.decorators.database import handle_db_errors


class BatchDAL:
    """Data Access Layer for Batch model operations"""

    @handle_db_errors(operation_type='create', model_name='Batch')
    def create_batch(self, batch_data: dict[str, Any]) -> Batch:
        return Batch.objects.create(**batch_data)

    @handle_db_errors(operation_type='read', model_name='Batch')
    def find_batch(self, batch_id) -> Batch | None:
        return Batch.objects.select_related('event').filter(pk=batch_id).first()

    @handle_db_errors(operation_type='read', model_name='Batch')
    def find_batch_for_event(self, batch_id, event_id) -> Batch | None:
        """Batch only if it belongs to the given event"""
        return Batch.objects.for_event(event_id).filter(pk=batch_id).first()

    @handle_db_errors(operation_type='read', model_name='Batch')
    def list_batches_for_event(self, event_id, active_only: bool = False) -> list[Batch]:
        queryset = Batch.objects.for_event(event_id)
        if active_only:
            queryset = queryset.active()
        return list(queryset.order_by('start_date', 'name'))

    @handle_db_errors(operation_type='update', model_name='Batch')
    def update_batch(self, batch: Batch, validated_data: dict[str, Any]) -> Batch:
        for field, value in validated_data.items():
            setattr(batch, field, value)
        batch.save()
        return batch

    @handle_db_errors(operation_type='delete', model_name='Batch')
    def delete_batch(self, batch: Batch) -> bool:
        batch.delete()
        return True
