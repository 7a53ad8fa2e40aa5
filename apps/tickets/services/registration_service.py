import logging
from typing import Any

from django.db import transaction

from apps.events.dal.event_dal import EventDAL
from apps.events.exceptions import EventNotFoundError
from apps.shared.cache.cache_manager import CacheManager
from apps.shared.utils.paginator import ServicePaginator
from apps.tickets.dal.registration_dal import RegistrationDAL
from apps.tickets.exceptions import RegistrationNotFoundError
from apps.tickets.models.registration import Registration
from apps.tickets.tasks import send_ticket_email_task
from apps.tickets.utils.qr_utils import TicketQRCodeGenerator

logger = logging.getLogger(__name__)

STATS_CACHE_TIMEOUT = 30


class RegistrationService:
    """Lookups, listings and admin overrides for issued tickets"""

    def __init__(self, dal=None, event_dal=None, cache_manager=None, qr_generator=None):
        self.dal = dal or RegistrationDAL()
        self.event_dal = event_dal or EventDAL()
        self.cache_manager = cache_manager or CacheManager()
        self.qr_generator = qr_generator or TicketQRCodeGenerator()
        self.paginator = ServicePaginator()

    def get_registration(self, ticket_id: str) -> Registration:
        registration = self.dal.find_by_ticket_id((ticket_id or '').strip())
        if registration is None:
            raise RegistrationNotFoundError(ticket_id)
        return self.ensure_qr_code(registration)

    def ensure_qr_code(self, registration: Registration) -> Registration:
        """Re-render the stored QR image for rows that lack one"""
        if registration.qr_code:
            return registration
        qr_code = self.qr_generator.generate_data_url(registration.ticket_id)
        return self.dal.update_qr_code(registration, qr_code)

    def get_event_registrations(self, event_id: int, filters: dict[str, Any]) -> dict[str, Any]:
        if self.event_dal.find_event(event_id) is None:
            raise EventNotFoundError(event_id)

        queryset = self.dal.get_event_registrations_queryset(
            event_id,
            batch_id=filters.get('batch'),
            search=(filters.get('search') or '').strip(),
        )
        return self.paginator.paginate(queryset, filters.get('page', 1), filters.get('page_size', 20))

    def get_stats(self, event_id: int | None = None) -> dict[str, int]:
        """{total, used, unused}; served from cache for a few seconds"""
        if event_id is not None and self.event_dal.find_event(event_id) is None:
            raise EventNotFoundError(event_id)

        cache_key = self.cache_manager.keys.ticket_stats(event_id)
        cached = self.cache_manager.get(cache_key)
        if cached is not None:
            return cached

        stats = self.dal.get_counters(event_id)
        self.cache_manager.set(cache_key, stats, timeout=STATS_CACHE_TIMEOUT)
        return stats

    def get_my_registrations(self, account) -> list[Registration]:
        return self.dal.list_for_account(account)

    @transaction.atomic
    def delete_registration(self, ticket_id: str) -> bool:
        """Administrative override; normal flow never deletes tickets"""
        registration = self.get_registration(ticket_id)
        event_id = registration.event_id

        result = self.dal.delete_registration(registration)
        transaction.on_commit(lambda: self._invalidate_caches(event_id))

        logger.warning(f'Ticket deleted by admin override: {ticket_id}')
        return result

    def resend_ticket_email(self, ticket_id: str) -> Registration:
        registration = self.get_registration(ticket_id)
        send_ticket_email_task.delay(registration.ticket_id)
        logger.info(f'Ticket email re-queued for {ticket_id}')
        return registration

    def _invalidate_caches(self, event_id: int) -> None:
        try:
            self.cache_manager.invalidate_ticket_stats(event_id)
        except Exception as e:
            logger.warning(f'Cache invalidation failed for event {event_id}: {e}')
