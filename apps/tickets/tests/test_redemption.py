from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase
from django.test import override_settings

from apps.events.tests.factories import BatchFactory
from apps.shared.exceptions import ServiceUnavailableError
from apps.tickets.models import Registration
from apps.tickets.services.issuer import AttendeeDetails
from apps.tickets.services.issuer import RegistrationIssuer
from apps.tickets.services.redemption import RedemptionGate
from apps.tickets.services.redemption import RedemptionOutcome
from apps.tickets.tests.factories import RegistrationFactory
from apps.tickets.tests.factories import UsedRegistrationFactory


class RedemptionGateTest(TestCase):
    def setUp(self):
        self.gate = RedemptionGate()
        self.registration = RegistrationFactory(full_name='Ada Lovelace', email='ada@example.com')

    def _stale_copy(self, registration):
        """Instance read before another scanner flipped the row"""
        stale = Registration.objects.get(pk=registration.pk)
        stale.status = Registration.Status.UNUSED
        stale.used_at = None
        return stale

    def test_first_scan_is_valid(self):
        result = self.gate.redeem(self.registration.ticket_id)

        self.assertEqual(result.outcome, RedemptionOutcome.VALID)
        self.assertEqual(
            result.to_payload(),
            {
                'status': 'valid',
                'user': 'Ada Lovelace',
                'email': 'ada@example.com',
                'ticketId': self.registration.ticket_id,
            },
        )
        self.assertEqual(result.http_status, 200)

        self.registration.refresh_from_db()
        self.assertEqual(self.registration.status, Registration.Status.USED)
        self.assertIsNotNone(self.registration.used_at)

    def test_valid_result_carries_stored_timestamp(self):
        result = self.gate.redeem(self.registration.ticket_id)

        self.registration.refresh_from_db()
        self.assertIsNotNone(result.used_at)
        self.assertEqual(result.used_at, self.registration.used_at)

    def test_second_scan_is_already_used(self):
        self.gate.redeem(self.registration.ticket_id)
        self.registration.refresh_from_db()
        first_used_at = self.registration.used_at

        result = self.gate.redeem(self.registration.ticket_id)

        self.assertEqual(result.outcome, RedemptionOutcome.ALREADY_USED)
        self.assertEqual(result.used_at, first_used_at)
        self.assertEqual(
            result.to_payload(),
            {'status': 'already_used', 'user': 'Ada Lovelace', 'usedAt': first_used_at.isoformat()},
        )

        self.registration.refresh_from_db()
        self.assertEqual(self.registration.used_at, first_used_at)

    def test_used_ticket_keeps_original_timestamp(self):
        used = UsedRegistrationFactory()
        original = used.used_at

        result = self.gate.redeem(used.ticket_id)

        self.assertEqual(result.outcome, RedemptionOutcome.ALREADY_USED)
        used.refresh_from_db()
        self.assertEqual(used.used_at, original)

    def test_repeated_scans_yield_exactly_one_valid(self):
        outcomes = [self.gate.redeem(self.registration.ticket_id).outcome for _ in range(5)]

        self.assertEqual(outcomes.count(RedemptionOutcome.VALID), 1)
        self.assertEqual(outcomes.count(RedemptionOutcome.ALREADY_USED), 4)

    def test_scan_trims_whitespace(self):
        result = self.gate.redeem(f'  {self.registration.ticket_id}\n')
        self.assertEqual(result.outcome, RedemptionOutcome.VALID)

    def test_unknown_ticket_is_not_found(self):
        result = self.gate.redeem('TKT-0000000000000-NOPE00000')

        self.assertEqual(result.outcome, RedemptionOutcome.NOT_FOUND)
        self.assertEqual(result.to_payload(), {'status': 'not_found'})
        self.assertEqual(result.http_status, 200)

        self.registration.refresh_from_db()
        self.assertEqual(self.registration.status, Registration.Status.UNUSED)

    def test_lookup_is_exact(self):
        result = self.gate.redeem(self.registration.ticket_id.lower())
        self.assertEqual(result.outcome, RedemptionOutcome.NOT_FOUND)

    def test_invalid_payloads_touch_no_storage(self):
        for payload in (None, '', '   ', 12345, ['TKT-1'], {'ticketId': 'TKT-1'}):
            with self.subTest(payload=payload):
                with self.assertNumQueries(0):
                    result = self.gate.redeem(payload)

                self.assertEqual(result.outcome, RedemptionOutcome.INVALID_FORMAT)
                self.assertEqual(result.to_payload(), {'status': 'invalid'})
                self.assertEqual(result.http_status, 400)

    def test_stale_read_loses_conditional_update(self):
        Registration.objects.filter(pk=self.registration.pk).update(
            status=Registration.Status.USED, used_at=self.registration.created_at
        )
        stale = self._stale_copy(self.registration)

        with patch.object(self.gate.dal, 'find_by_ticket_id', return_value=stale):
            result = self.gate.redeem(self.registration.ticket_id)

        self.assertEqual(result.outcome, RedemptionOutcome.ALREADY_USED)
        self.assertEqual(result.used_at, self.registration.created_at)

    def test_ticket_deleted_during_redemption(self):
        stale = self._stale_copy(self.registration)
        Registration.objects.filter(pk=self.registration.pk).delete()

        with patch.object(self.gate.dal, 'find_by_ticket_id', return_value=stale):
            result = self.gate.redeem(self.registration.ticket_id)

        self.assertEqual(result.outcome, RedemptionOutcome.NOT_FOUND)

    def test_storage_failure_is_system_error(self):
        failure = ServiceUnavailableError('Database service is temporarily unavailable')

        with patch.object(self.gate.dal, 'mark_used', side_effect=failure):
            result = self.gate.redeem(self.registration.ticket_id)

        self.assertEqual(result.outcome, RedemptionOutcome.SYSTEM_ERROR)
        self.assertEqual(
            result.to_payload(),
            {'status': 'error', 'message': 'Database service is temporarily unavailable'},
        )
        self.assertEqual(result.http_status, 500)

        self.registration.refresh_from_db()
        self.assertEqual(self.registration.status, Registration.Status.UNUSED)
        self.assertIsNone(self.registration.used_at)

    def test_raw_database_error_is_system_error(self):
        with patch.object(self.gate.dal, 'find_by_ticket_id', side_effect=DatabaseError('connection lost')):
            result = self.gate.redeem(self.registration.ticket_id)

        self.assertEqual(result.outcome, RedemptionOutcome.SYSTEM_ERROR)
        self.assertEqual(result.message, 'connection lost')

    @patch('apps.tickets.services.redemption.send_ticket_used_notification_task')
    def test_no_notification_by_default(self, notify_task):
        with self.captureOnCommitCallbacks(execute=True):
            self.gate.redeem(self.registration.ticket_id)

        notify_task.delay.assert_not_called()

    @override_settings(TICKETS_NOTIFY_ON_REDEEM=True)
    @patch('apps.tickets.services.redemption.send_ticket_used_notification_task')
    def test_notification_after_commit(self, notify_task):
        with self.captureOnCommitCallbacks(execute=True):
            self.gate.redeem(self.registration.ticket_id)
            self.gate.redeem(self.registration.ticket_id)

        notify_task.delay.assert_called_once_with(self.registration.ticket_id)

    @patch('apps.tickets.services.redemption.CacheManager.invalidate_ticket_stats')
    def test_stats_invalidated_after_commit(self, invalidate):
        gate = RedemptionGate()

        with self.captureOnCommitCallbacks(execute=True):
            gate.redeem(self.registration.ticket_id)

        invalidate.assert_called_once_with(self.registration.event_id)


@patch('apps.tickets.services.issuer.send_admin_registration_notification_task')
@patch('apps.tickets.services.issuer.send_ticket_email_task')
class IssueThenRedeemTest(TestCase):
    def setUp(self):
        self.batch = BatchFactory()
        self.issuer = RegistrationIssuer()
        self.gate = RedemptionGate()

    def test_issued_ticket_redeems_once(self, email_task, admin_task):
        attendee = AttendeeDetails(full_name='Grace Hopper', email='grace@example.com', phone='+254700000002')
        issued = self.issuer.issue(self.batch.event_id, self.batch.pk, attendee)
        ticket_id = issued.registration.ticket_id

        first = self.gate.redeem(f' {ticket_id} ')

        self.assertEqual(first.outcome, RedemptionOutcome.VALID)
        self.assertEqual(first.user, 'Grace Hopper')
        self.assertEqual(first.email, 'grace@example.com')
        self.assertEqual(first.ticket_id, ticket_id)

        second = self.gate.redeem(ticket_id)

        self.assertEqual(second.outcome, RedemptionOutcome.ALREADY_USED)
        self.assertEqual(second.user, 'Grace Hopper')
        self.assertEqual(second.used_at, first.used_at)

        registration = Registration.objects.get(ticket_id=ticket_id)
        self.assertEqual(registration.status, Registration.Status.USED)
        self.assertEqual(registration.used_at, first.used_at)
