"""
Door check-in: turns a scanned QR payload into exactly one outcome.

A ticket moves from Unused to Used once. The transition is a single
conditional UPDATE, so any number of scanners racing on the same code
produce one VALID and the rest ALREADY_USED.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from django.conf import settings
from django.db import DatabaseError
from django.db import transaction
from django.utils import timezone
from rest_framework import status

from apps.shared.cache.cache_manager import CacheManager
from apps.shared.exceptions import ServiceUnavailableError
from apps.tickets.dal.registration_dal import RegistrationDAL
from apps.tickets.tasks import send_ticket_used_notification_task
from apps.tickets.utils.ticket_id import parse_ticket_payload

logger = logging.getLogger(__name__)


class RedemptionOutcome(Enum):
    VALID = 'valid'
    ALREADY_USED = 'already_used'
    NOT_FOUND = 'not_found'
    INVALID_FORMAT = 'invalid'
    SYSTEM_ERROR = 'error'


HTTP_STATUS_BY_OUTCOME = {
    RedemptionOutcome.VALID: status.HTTP_200_OK,
    RedemptionOutcome.ALREADY_USED: status.HTTP_200_OK,
    RedemptionOutcome.NOT_FOUND: status.HTTP_200_OK,
    RedemptionOutcome.INVALID_FORMAT: status.HTTP_400_BAD_REQUEST,
    RedemptionOutcome.SYSTEM_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@dataclass(frozen=True)
class RedemptionResult:
    outcome: RedemptionOutcome
    ticket_id: str | None = None
    user: str | None = None
    email: str | None = None
    used_at: datetime | None = None
    message: str | None = None

    @classmethod
    def valid(cls, registration, used_at: datetime) -> 'RedemptionResult':
        return cls(
            RedemptionOutcome.VALID,
            ticket_id=registration.ticket_id,
            user=registration.full_name,
            email=registration.email,
            used_at=used_at,
        )

    @classmethod
    def already_used(cls, registration) -> 'RedemptionResult':
        return cls(
            RedemptionOutcome.ALREADY_USED,
            ticket_id=registration.ticket_id,
            user=registration.full_name,
            used_at=registration.used_at,
        )

    @classmethod
    def not_found(cls) -> 'RedemptionResult':
        return cls(RedemptionOutcome.NOT_FOUND)

    @classmethod
    def invalid_format(cls) -> 'RedemptionResult':
        return cls(RedemptionOutcome.INVALID_FORMAT)

    @classmethod
    def system_error(cls, message: str) -> 'RedemptionResult':
        return cls(RedemptionOutcome.SYSTEM_ERROR, message=message)

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_OUTCOME[self.outcome]

    def to_payload(self) -> dict:
        """Wire format returned to the scanner"""
        payload = {'status': self.outcome.value}
        if self.outcome is RedemptionOutcome.VALID:
            payload.update({'user': self.user, 'email': self.email, 'ticketId': self.ticket_id})
        elif self.outcome is RedemptionOutcome.ALREADY_USED:
            payload.update({'user': self.user, 'usedAt': self.used_at.isoformat() if self.used_at else None})
        elif self.outcome is RedemptionOutcome.SYSTEM_ERROR:
            payload['message'] = self.message
        return payload


class RedemptionGate:
    """Validates scanned tickets and marks them used"""

    def __init__(self, dal=None, cache_manager=None):
        self.dal = dal or RegistrationDAL()
        self.cache_manager = cache_manager or CacheManager()

    def redeem(self, raw_scan) -> RedemptionResult:
        ticket_id = parse_ticket_payload(raw_scan)
        if ticket_id is None:
            logger.info('Redemption rejected: empty or non-text payload')
            return RedemptionResult.invalid_format()

        # No enclosing atomic block: the read and the conditional update
        # each autocommit.
        try:
            return self._redeem(ticket_id)
        except (ServiceUnavailableError, DatabaseError) as e:
            logger.exception(f'Redemption of {ticket_id} failed on storage: {e}')
            return RedemptionResult.system_error(str(e) or 'Storage unavailable')

    def _redeem(self, ticket_id: str) -> RedemptionResult:
        registration = self.dal.find_by_ticket_id(ticket_id)
        if registration is None:
            logger.warning(f'Redemption of unknown ticket {ticket_id}')
            return RedemptionResult.not_found()

        used_at = timezone.now()
        if self.dal.mark_used(registration.pk, used_at):
            event_id = registration.event_id
            transaction.on_commit(lambda: self._after_redeem(ticket_id, event_id))
            logger.info(f'Ticket redeemed: {ticket_id} ({registration.email})')
            return RedemptionResult.valid(registration, used_at)

        # Lost the conditional update: someone already used it
        current = self.dal.refresh(registration.pk)
        if current is None:
            logger.warning(f'Ticket {ticket_id} deleted during redemption')
            return RedemptionResult.not_found()

        logger.warning(f'Ticket {ticket_id} already used at {current.used_at}')
        return RedemptionResult.already_used(current)

    def _after_redeem(self, ticket_id: str, event_id: int) -> None:
        try:
            self.cache_manager.invalidate_ticket_stats(event_id)
        except Exception as e:
            logger.warning(f'Cache invalidation failed after redeeming {ticket_id}: {e}')

        if getattr(settings, 'TICKETS_NOTIFY_ON_REDEEM', False):
            try:
                send_ticket_used_notification_task.delay(ticket_id)
            except Exception as e:
                logger.warning(f'Non-critical: could not queue used notification for {ticket_id}: {e}')
