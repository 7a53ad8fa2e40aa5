from unittest.mock import patch

from django.test import TestCase
from django.test import override_settings

from apps.accounts.models import CustomUser
from apps.accounts.tests.factories import UserFactory
from apps.events.tests.factories import BatchFactory
from apps.events.tests.factories import EventFactory
from apps.tickets.models import Registration
from apps.tickets.services.issuer import AttendeeDetails
from apps.tickets.services.issuer import IssueOutcome
from apps.tickets.services.issuer import RegistrationIssuer
from apps.tickets.tests.factories import RegistrationFactory


def make_attendee(**overrides):
    data = {
        'full_name': 'Ada Lovelace',
        'email': 'ada@example.com',
        'phone': '+254700000001',
        'message': '',
    }
    data.update(overrides)
    return AttendeeDetails(**data)


@patch('apps.tickets.services.issuer.send_admin_registration_notification_task')
@patch('apps.tickets.services.issuer.send_ticket_email_task')
class RegistrationIssuerTest(TestCase):
    def setUp(self):
        self.event = EventFactory()
        self.batch = BatchFactory(event=self.event)
        self.issuer = RegistrationIssuer()

    def test_issue_creates_unused_ticket(self, email_task, admin_task):
        result = self.issuer.issue(self.event.pk, self.batch.pk, make_attendee())

        self.assertEqual(result.outcome, IssueOutcome.ISSUED)
        self.assertTrue(result.is_issued)

        registration = Registration.objects.get(pk=result.registration.pk)
        self.assertEqual(registration.status, Registration.Status.UNUSED)
        self.assertIsNone(registration.used_at)
        self.assertIsNotNone(registration.created_at)
        self.assertEqual(registration.event, self.event)
        self.assertEqual(registration.batch, self.batch)
        self.assertRegex(registration.ticket_id, r'^TKT-\d{13,}-[0-9A-Z]{9}$')
        self.assertTrue(registration.qr_code.startswith('data:image/png;base64,'))

    def test_issue_normalizes_attendee_fields(self, email_task, admin_task):
        attendee = make_attendee(full_name='  Ada Lovelace ', email='  Ada@Example.COM ', phone=' +254700000001 ')
        result = self.issuer.issue(self.event.pk, self.batch.pk, attendee)

        registration = result.registration
        self.assertEqual(registration.full_name, 'Ada Lovelace')
        self.assertEqual(registration.email, 'ada@example.com')
        self.assertEqual(registration.phone, '+254700000001')

    def test_issue_accepts_string_ids(self, email_task, admin_task):
        result = self.issuer.issue(str(self.event.pk), f' {self.batch.pk} ', make_attendee())
        self.assertEqual(result.outcome, IssueOutcome.ISSUED)

    def test_ticket_ids_unique_across_issuances(self, email_task, admin_task):
        ticket_ids = set()
        for i in range(15):
            result = self.issuer.issue(self.event.pk, self.batch.pk, make_attendee(email=f'guest{i}@example.com'))
            ticket_ids.add(result.registration.ticket_id)

        self.assertEqual(len(ticket_ids), 15)

    def test_creates_passwordless_account_for_new_email(self, email_task, admin_task):
        result = self.issuer.issue(self.event.pk, self.batch.pk, make_attendee())

        account = result.registration.account
        self.assertIsNotNone(account)
        self.assertEqual(account.email, 'ada@example.com')
        self.assertFalse(account.is_registered)
        self.assertFalse(account.has_usable_password())
        self.assertEqual(account.first_name, 'Ada')
        self.assertEqual(account.last_name, 'Lovelace')

    def test_links_existing_account_by_email(self, email_task, admin_task):
        user = UserFactory(email='ada@example.com')

        result = self.issuer.issue(self.event.pk, self.batch.pk, make_attendee(email='ADA@example.com'))

        self.assertEqual(result.registration.account, user)
        self.assertEqual(CustomUser.objects.filter(email='ada@example.com').count(), 1)

    def test_one_account_for_many_events(self, email_task, admin_task):
        other_batch = BatchFactory()
        first = self.issuer.issue(self.event.pk, self.batch.pk, make_attendee())
        second = self.issuer.issue(other_batch.event.pk, other_batch.pk, make_attendee())

        self.assertEqual(second.outcome, IssueOutcome.ISSUED)
        self.assertEqual(first.registration.account, second.registration.account)

    def test_duplicate_email_same_event(self, email_task, admin_task):
        self.issuer.issue(self.event.pk, self.batch.pk, make_attendee())

        result = self.issuer.issue(self.event.pk, self.batch.pk, make_attendee(email=' ADA@example.com '))

        self.assertEqual(result.outcome, IssueOutcome.DUPLICATE)
        self.assertIsNone(result.registration)
        self.assertEqual(Registration.objects.filter(event=self.event).count(), 1)

    def test_duplicate_across_batches_of_same_event(self, email_task, admin_task):
        other_batch = BatchFactory(event=self.event)
        self.issuer.issue(self.event.pk, self.batch.pk, make_attendee())

        result = self.issuer.issue(self.event.pk, other_batch.pk, make_attendee())

        self.assertEqual(result.outcome, IssueOutcome.DUPLICATE)

    def test_duplicate_detected_through_account(self, email_task, admin_task):
        user = UserFactory(email='ada@example.com')
        RegistrationFactory(batch=self.batch, email='ada.old@example.com', account=user)

        result = self.issuer.issue(self.event.pk, self.batch.pk, make_attendee())

        self.assertEqual(result.outcome, IssueOutcome.DUPLICATE)

    def test_same_email_different_event_is_allowed(self, email_task, admin_task):
        other_batch = BatchFactory()
        self.issuer.issue(self.event.pk, self.batch.pk, make_attendee())

        result = self.issuer.issue(other_batch.event.pk, other_batch.pk, make_attendee())

        self.assertEqual(result.outcome, IssueOutcome.ISSUED)

    def test_unknown_event(self, email_task, admin_task):
        result = self.issuer.issue(999999, self.batch.pk, make_attendee())

        self.assertEqual(result.outcome, IssueOutcome.EVENT_NOT_FOUND)
        self.assertEqual(Registration.objects.count(), 0)

    def test_unknown_batch(self, email_task, admin_task):
        result = self.issuer.issue(self.event.pk, 999999, make_attendee())

        self.assertEqual(result.outcome, IssueOutcome.BATCH_NOT_FOUND)
        self.assertEqual(Registration.objects.count(), 0)

    def test_batch_of_another_event_is_not_found(self, email_task, admin_task):
        foreign_batch = BatchFactory()

        result = self.issuer.issue(self.event.pk, foreign_batch.pk, make_attendee())

        self.assertEqual(result.outcome, IssueOutcome.BATCH_NOT_FOUND)

    def test_invalid_input_touches_no_storage(self, email_task, admin_task):
        attendee = make_attendee(full_name=' A ', email='not-an-email', phone='1234')

        with self.assertNumQueries(0):
            result = self.issuer.issue(None, '', attendee)

        self.assertEqual(result.outcome, IssueOutcome.INVALID)
        self.assertEqual(
            set(result.field_errors),
            {'full_name', 'email', 'phone', 'event_id', 'batch_id'},
        )

    def test_invalid_single_field(self, email_task, admin_task):
        result = self.issuer.issue(self.event.pk, self.batch.pk, make_attendee(phone='0712345'))

        self.assertEqual(result.outcome, IssueOutcome.INVALID)
        self.assertEqual(list(result.field_errors), ['phone'])

    def test_capacity_is_informational(self, email_task, admin_task):
        self.event.total_tickets = 1
        self.event.save()
        small_batch = BatchFactory(event=self.event, max_tickets=1)

        first = self.issuer.issue(self.event.pk, small_batch.pk, make_attendee(email='one@example.com'))
        second = self.issuer.issue(self.event.pk, small_batch.pk, make_attendee(email='two@example.com'))

        self.assertEqual(first.outcome, IssueOutcome.ISSUED)
        self.assertEqual(second.outcome, IssueOutcome.ISSUED)
        self.assertEqual(small_batch.registrations.count(), 2)

    def test_duplicate_check_is_not_atomic_with_insert(self, email_task, admin_task):
        """Two submissions whose checks both run before either insert are both issued"""
        self.issuer.issue(self.event.pk, self.batch.pk, make_attendee())

        with patch.object(self.issuer.dal, 'registration_exists', return_value=False):
            racing = self.issuer.issue(self.event.pk, self.batch.pk, make_attendee())

        self.assertEqual(racing.outcome, IssueOutcome.ISSUED)
        self.assertEqual(Registration.objects.filter(event=self.event, email='ada@example.com').count(), 2)

    def test_ticket_id_collision_is_regenerated(self, email_task, admin_task):
        existing = RegistrationFactory(batch=self.batch, email='someone@example.com')
        fresh_id = 'TKT-1704067890123-FRESH0001'

        with patch(
            'apps.tickets.services.issuer.generate_ticket_id',
            side_effect=[existing.ticket_id, fresh_id],
        ):
            result = self.issuer.issue(self.event.pk, self.batch.pk, make_attendee())

        self.assertEqual(result.outcome, IssueOutcome.ISSUED)
        self.assertEqual(result.registration.ticket_id, fresh_id)

    def test_queues_ticket_email_after_commit(self, email_task, admin_task):
        with self.captureOnCommitCallbacks(execute=True):
            result = self.issuer.issue(self.event.pk, self.batch.pk, make_attendee())

        email_task.delay.assert_called_once_with(result.registration.ticket_id)
        admin_task.delay.assert_not_called()

    @override_settings(TICKETS_SEND_EMAILS=False, TICKETS_ADMIN_EMAIL='organizer@example.com')
    def test_notification_settings(self, email_task, admin_task):
        with self.captureOnCommitCallbacks(execute=True):
            result = self.issuer.issue(self.event.pk, self.batch.pk, make_attendee())

        email_task.delay.assert_not_called()
        admin_task.delay.assert_called_once_with(result.registration.ticket_id)

    def test_email_failure_does_not_unwind_issuance(self, email_task, admin_task):
        email_task.delay.side_effect = ConnectionError('broker down')

        with self.captureOnCommitCallbacks(execute=True):
            result = self.issuer.issue(self.event.pk, self.batch.pk, make_attendee())

        self.assertEqual(result.outcome, IssueOutcome.ISSUED)
        self.assertTrue(Registration.objects.filter(ticket_id=result.registration.ticket_id).exists())

    def test_nothing_queued_for_rejected_submission(self, email_task, admin_task):
        self.issuer.issue(self.event.pk, self.batch.pk, make_attendee())
        email_task.reset_mock()

        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            self.issuer.issue(self.event.pk, self.batch.pk, make_attendee())

        self.assertEqual(callbacks, [])
        email_task.delay.assert_not_called()
