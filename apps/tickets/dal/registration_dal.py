import logging
from datetime import datetime
from typing import Any

from django.db.models import Q
from django.db.models import QuerySet

from apps.shared.decorators.database import handle_db_errors
from apps.tickets.models.registration import Registration

logger = logging.getLogger(__name__)


class RegistrationDAL:
    """Data Access Layer for Registration (ticket) operations"""

    @handle_db_errors(operation_type='create', model_name='Registration')
    def create_registration(self, registration_data: dict[str, Any]) -> Registration:
        return Registration.objects.create(**registration_data)

    @handle_db_errors(operation_type='read', model_name='Registration')
    def find_by_ticket_id(self, ticket_id: str) -> Registration | None:
        return Registration.objects.with_relations().filter(ticket_id=ticket_id).first()

    @handle_db_errors(operation_type='read', model_name='Registration')
    def registration_exists(self, event_id, email: str, account=None) -> bool:
        """
        Best-effort duplicate check for (attendee, event).

        Matches on the normalized email, or on the resolved account when one
        is known. Not atomic with the subsequent insert.
        """
        condition = Q(email__iexact=(email or '').strip())
        if account is not None:
            condition |= Q(account=account)
        return Registration.objects.for_event(event_id).filter(condition).exists()

    @handle_db_errors(operation_type='update', model_name='Registration')
    def mark_used(self, registration_id: int, used_at: datetime) -> bool:
        """
        Conditionally flip Unused -> Used.

        The status predicate runs inside the UPDATE itself, so of any number
        of concurrent callers exactly one sees an updated row.
        """
        updated = Registration.objects.filter(
            pk=registration_id,
            status=Registration.Status.UNUSED,
        ).update(status=Registration.Status.USED, used_at=used_at)
        return updated == 1

    @handle_db_errors(operation_type='read', model_name='Registration')
    def refresh(self, registration_id: int) -> Registration | None:
        return Registration.objects.with_relations().filter(pk=registration_id).first()

    @handle_db_errors(operation_type='update', model_name='Registration')
    def update_qr_code(self, registration: Registration, qr_code: str) -> Registration:
        Registration.objects.filter(pk=registration.pk).update(qr_code=qr_code)
        registration.qr_code = qr_code
        return registration

    def get_event_registrations_queryset(
        self, event_id, batch_id=None, search: str = ''
    ) -> QuerySet[Registration]:
        queryset = Registration.objects.for_event(event_id).with_relations()
        if batch_id:
            queryset = queryset.for_batch(batch_id)
        return queryset.search(search).order_by('-created_at', '-id')

    @handle_db_errors(operation_type='read', model_name='Registration')
    def get_counters(self, event_id=None) -> dict[str, int]:
        queryset = Registration.objects.all()
        if event_id is not None:
            queryset = queryset.for_event(event_id)
        counters = queryset.counters()
        return {key: counters[key] or 0 for key in ('total', 'used', 'unused')}

    @handle_db_errors(operation_type='read', model_name='Registration')
    def list_for_account(self, account) -> list[Registration]:
        return list(Registration.objects.with_relations().filter(account=account).order_by('-created_at', '-id'))

    @handle_db_errors(operation_type='update', model_name='Registration')
    def link_unclaimed_registrations(self, account) -> int:
        """Attach registrations made with the account's email before it existed"""
        linked = Registration.objects.filter(account__isnull=True, email__iexact=account.email).update(account=account)
        if linked:
            logger.info(f'Linked {linked} registrations to account {account.id}')
        return linked

    @handle_db_errors(operation_type='delete', model_name='Registration')
    def delete_registration(self, registration: Registration) -> bool:
        registration.delete()
        return True
