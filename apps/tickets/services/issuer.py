"""
Registration issuance: one ticket per attendee per event.

Outcomes are returned as IssueResult values; the HTTP layer decides how
each one is presented.
"""

import logging
from dataclasses import dataclass
from dataclasses import field
from enum import Enum

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import transaction

from apps.accounts.services.user_service import UserService
from apps.events.dal.batch_dal import BatchDAL
from apps.events.dal.event_dal import EventDAL
from apps.shared.cache.cache_manager import CacheManager
from apps.shared.exceptions import ValidationError
from apps.tickets.dal.registration_dal import RegistrationDAL
from apps.tickets.models.registration import Registration
from apps.tickets.tasks import send_admin_registration_notification_task
from apps.tickets.tasks import send_ticket_email_task
from apps.tickets.utils.qr_utils import TicketQRCodeGenerator
from apps.tickets.utils.ticket_id import generate_ticket_id

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2
MIN_PHONE_LENGTH = 8
TICKET_ID_ATTEMPTS = 3


class IssueOutcome(Enum):
    ISSUED = 'issued'
    DUPLICATE = 'duplicate'
    EVENT_NOT_FOUND = 'event_not_found'
    BATCH_NOT_FOUND = 'batch_not_found'
    INVALID = 'invalid'


@dataclass(frozen=True)
class AttendeeDetails:
    """What the attendee typed into the registration form."""

    full_name: str
    email: str
    phone: str
    message: str = ''


@dataclass(frozen=True)
class IssueResult:
    outcome: IssueOutcome
    registration: Registration | None = None
    field_errors: dict = field(default_factory=dict)

    @property
    def is_issued(self) -> bool:
        return self.outcome is IssueOutcome.ISSUED

    @classmethod
    def issued(cls, registration: Registration) -> 'IssueResult':
        return cls(IssueOutcome.ISSUED, registration=registration)

    @classmethod
    def invalid(cls, field_errors: dict) -> 'IssueResult':
        return cls(IssueOutcome.INVALID, field_errors=field_errors)


def validate_attendee(event_id, batch_id, attendee: AttendeeDetails) -> dict[str, list[str]]:
    """Per-field errors for a registration submission; empty when valid"""
    errors = {}

    full_name = (attendee.full_name or '').strip()
    if len(full_name) < MIN_NAME_LENGTH:
        errors['full_name'] = [f'Full name must be at least {MIN_NAME_LENGTH} characters']

    email = (attendee.email or '').strip()
    try:
        validate_email(email)
    except DjangoValidationError:
        errors['email'] = ['Enter a valid email address']

    phone = (attendee.phone or '').strip()
    if len(phone) < MIN_PHONE_LENGTH:
        errors['phone'] = [f'Phone number must be at least {MIN_PHONE_LENGTH} characters']

    if _coerce_id(event_id) is None:
        errors['event_id'] = ['Please select an event']
    if _coerce_id(batch_id) is None:
        errors['batch_id'] = ['Please select a batch']

    return errors


def _coerce_id(value) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        coerced = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return coerced if coerced > 0 else None


class RegistrationIssuer:
    """
    Creates Registrations.

    The duplicate check and the insert are not atomic: two simultaneous
    submissions for the same attendee and event can both be issued.
    """

    def __init__(
        self,
        dal=None,
        event_dal=None,
        batch_dal=None,
        user_service=None,
        qr_generator=None,
        cache_manager=None,
    ):
        self.dal = dal or RegistrationDAL()
        self.event_dal = event_dal or EventDAL()
        self.batch_dal = batch_dal or BatchDAL()
        self.user_service = user_service or UserService(registration_dal=self.dal)
        self.qr_generator = qr_generator or TicketQRCodeGenerator()
        self.cache_manager = cache_manager or CacheManager()

    def issue(self, event_id, batch_id, attendee: AttendeeDetails) -> IssueResult:
        field_errors = validate_attendee(event_id, batch_id, attendee)
        if field_errors:
            logger.info(f'Registration rejected by validation: {sorted(field_errors)}')
            return IssueResult.invalid(field_errors)

        event_id = _coerce_id(event_id)
        batch_id = _coerce_id(batch_id)
        email = attendee.email.strip().lower()

        with transaction.atomic():
            event = self.event_dal.find_event(event_id)
            if event is None:
                logger.info(f'Registration for unknown event {event_id}')
                return IssueResult(IssueOutcome.EVENT_NOT_FOUND)

            batch = self.batch_dal.find_batch_for_event(batch_id, event.pk)
            if batch is None:
                logger.info(f'Registration for unknown batch {batch_id} of event {event_id}')
                return IssueResult(IssueOutcome.BATCH_NOT_FOUND)

            existing_account = self.user_service.find_account(email)
            if self.dal.registration_exists(event.pk, email, account=existing_account):
                logger.warning(f'Duplicate registration attempt: {email} for event {event.pk}')
                return IssueResult(IssueOutcome.DUPLICATE)

            account = existing_account or self.user_service.resolve_attendee_account(email, attendee.full_name)

            registration = self._create_registration(
                {
                    'event': event,
                    'batch': batch,
                    'account': account,
                    'full_name': attendee.full_name,
                    'email': email,
                    'phone': attendee.phone,
                    'message': attendee.message or '',
                    'status': Registration.Status.UNUSED,
                }
            )

            ticket_id = registration.ticket_id
            transaction.on_commit(lambda: self._after_issue(ticket_id, event.pk))

        logger.info(f'Ticket issued: {registration.ticket_id} for {email} (event {event.pk}, batch {batch.pk})')
        return IssueResult.issued(registration)

    def _create_registration(self, registration_data: dict) -> Registration:
        """Insert with a fresh ticketId, regenerating on the rare collision"""
        for attempt in range(1, TICKET_ID_ATTEMPTS + 1):
            ticket_id = generate_ticket_id()
            data = {
                **registration_data,
                'ticket_id': ticket_id,
                'qr_code': self.qr_generator.generate_data_url(ticket_id),
            }
            try:
                with transaction.atomic():
                    return self.dal.create_registration(data)
            except ValidationError as e:
                if not e.get_context().get('constraint_violation') or attempt == TICKET_ID_ATTEMPTS:
                    raise
                logger.warning(f'Ticket id collision on {ticket_id}, regenerating (attempt {attempt})')

    def _after_issue(self, ticket_id: str, event_id: int) -> None:
        try:
            self.cache_manager.invalidate_ticket_stats(event_id)
        except Exception as e:
            logger.warning(f'Cache invalidation failed after issuing {ticket_id}: {e}')

        if getattr(settings, 'TICKETS_SEND_EMAILS', True):
            try:
                send_ticket_email_task.delay(ticket_id)
            except Exception as e:
                logger.warning(f'Non-critical: could not queue ticket email for {ticket_id}: {e}')

        if getattr(settings, 'TICKETS_ADMIN_EMAIL', ''):
            try:
                send_admin_registration_notification_task.delay(ticket_id)
            except Exception as e:
                logger.warning(f'Non-critical: could not queue admin notification for {ticket_id}: {e}')
