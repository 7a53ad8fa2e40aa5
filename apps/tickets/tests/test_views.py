from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase
from django.urls import reverse
from rest_framework import status

from apps.events.tests.factories import BatchFactory
from apps.events.tests.utils import EventTestMixin
from apps.shared.container import get_container
from apps.shared.exceptions import ServiceUnavailableError
from apps.tickets.dal.registration_dal import RegistrationDAL
from apps.tickets.models import Registration
from apps.tickets.tests.factories import RegistrationFactory
from apps.tickets.tests.factories import UsedRegistrationFactory


@patch('apps.tickets.services.issuer.send_ticket_email_task')
class RegisterTicketAPIViewTest(EventTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.url = reverse('tickets:ticket-register')

    def _payload(self, **overrides):
        payload = {
            'fullName': 'Ada Lovelace',
            'email': 'ada@example.com',
            'phone': '+254700000001',
            'message': 'See you there',
            'eventId': self.event.pk,
            'batchId': self.batch.pk,
        }
        payload.update(overrides)
        return payload

    def test_register_returns_ticket(self, email_task):
        response = self.anonymous_client.post(self.url, self._payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data
        self.assertRegex(data['ticketId'], r'^TKT-\d+-[0-9A-Z]{9}$')
        self.assertEqual(data['fullName'], 'Ada Lovelace')
        self.assertEqual(data['eventId'], self.event.pk)
        self.assertEqual(data['batchId'], self.batch.pk)
        self.assertEqual(data['status'], 'Unused')
        self.assertIsNone(data['usedAt'])
        self.assertTrue(data['qrCode'].startswith('data:image/png;base64,'))

    def test_register_invalid_fields(self, email_task):
        payload = self._payload(fullName='A', email='nope', phone='123', eventId='', batchId=None)

        response = self.anonymous_client.post(self.url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error_code'], 'registration_invalid')
        self.assertEqual(
            set(response.data['field_errors']),
            {'fullName', 'email', 'phone', 'eventId', 'batchId'},
        )
        self.assertEqual(Registration.objects.count(), 0)

    def test_register_duplicate_conflict(self, email_task):
        self.anonymous_client.post(self.url, self._payload(), format='json')

        response = self.anonymous_client.post(self.url, self._payload(email='ADA@example.com'), format='json')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error_code'], 'duplicate_registration')
        self.assertEqual(response.data['message'], 'You have already registered for this event')

    def test_register_unknown_event(self, email_task):
        response = self.anonymous_client.post(self.url, self._payload(eventId=999999), format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error_code'], 'event_not_found')

    def test_register_batch_of_other_event(self, email_task):
        response = self.anonymous_client.post(self.url, self._payload(batchId=BatchFactory().pk), format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error_code'], 'batch_not_found')


class VerifyTicketAPIViewTest(EventTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.url = reverse('tickets:ticket-verify')
        self.registration = RegistrationFactory(batch=self.batch, full_name='Ada Lovelace', email='ada@example.com')

    def test_requires_authentication(self):
        response = self.anonymous_client.post(self.url, {'ticketId': self.registration.ticket_id}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_requires_staff(self):
        response = self.user_client.post(self.url, {'ticketId': self.registration.ticket_id}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.registration.refresh_from_db()
        self.assertFalse(self.registration.is_used)

    def test_valid_then_already_used(self):
        first = self.staff_client.post(self.url, {'ticketId': self.registration.ticket_id}, format='json')

        self.assertEqual(first.status_code, status.HTTP_200_OK)
        self.assertEqual(
            first.data,
            {'status': 'valid', 'user': 'Ada Lovelace', 'email': 'ada@example.com', 'ticketId': self.registration.ticket_id},
        )

        second = self.staff_client.post(self.url, {'ticketId': self.registration.ticket_id}, format='json')

        self.registration.refresh_from_db()
        self.assertEqual(second.status_code, status.HTTP_200_OK)
        self.assertEqual(second.data['status'], 'already_used')
        self.assertEqual(second.data['user'], 'Ada Lovelace')
        self.assertEqual(second.data['usedAt'], self.registration.used_at.isoformat())

    def test_not_found(self):
        response = self.staff_client.post(self.url, {'ticketId': 'TKT-0-UNKNOWN'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'status': 'not_found'})

    def test_invalid_payloads(self):
        for body in ({}, {'ticketId': ''}, {'ticketId': '   '}, {'ticketId': 42}, {'ticketId': None}):
            with self.subTest(body=body):
                response = self.staff_client.post(self.url, body, format='json')

                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertEqual(response.data, {'status': 'invalid'})

    def test_storage_failure(self):
        with patch(
            'apps.tickets.dal.registration_dal.RegistrationDAL.mark_used',
            side_effect=DatabaseError('disk I/O error'),
        ):
            response = self.staff_client.post(self.url, {'ticketId': self.registration.ticket_id}, format='json')

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['status'], 'error')
        self.assertIn('message', response.data)

    def test_unreachable_storage(self):
        class UnreachableRegistrationDAL(RegistrationDAL):
            def find_by_ticket_id(self, ticket_id):
                raise ServiceUnavailableError('Database service is temporarily unavailable')

        container = get_container()
        container.override_registration_dal(UnreachableRegistrationDAL)
        self.addCleanup(container.reset_to_defaults)

        response = self.staff_client.post(self.url, {'ticketId': self.registration.ticket_id}, format='json')

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(
            response.data,
            {'status': 'error', 'message': 'Database service is temporarily unavailable'},
        )


class TicketReadAPIViewTest(EventTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.registration = RegistrationFactory(batch=self.batch, account=self.user)

    def test_detail_for_staff(self):
        url = reverse('tickets:ticket-detail', kwargs={'ticket_id': self.registration.ticket_id})

        response = self.staff_client.get(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['ticketId'], self.registration.ticket_id)
        self.assertEqual(response.data['eventName'], self.event.name)
        self.assertIn('qrCode', response.data)

    def test_detail_unknown(self):
        url = reverse('tickets:ticket-detail', kwargs={'ticket_id': 'TKT-0-UNKNOWN'})

        response = self.staff_client.get(url)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error_code'], 'ticket_not_found')

    def test_detail_forbidden_for_attendee(self):
        url = reverse('tickets:ticket-detail', kwargs={'ticket_id': self.registration.ticket_id})
        self.assertEqual(self.user_client.get(url).status_code, status.HTTP_403_FORBIDDEN)

    def test_my_tickets(self):
        RegistrationFactory()

        response = self.user_client.get(reverse('tickets:my-tickets'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [item['ticketId'] for item in response.data['registrations']],
            [self.registration.ticket_id],
        )

    def test_my_tickets_requires_login(self):
        response = self.anonymous_client.get(reverse('tickets:my-tickets'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_event_registrations(self):
        other = RegistrationFactory(batch=self.batch, full_name='Grace Hopper')
        url = reverse('tickets:event-registrations', kwargs={'event_id': self.event.pk})

        response = self.staff_client.get(url, {'search': 'grace', 'page_size': 10})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['ticketId'] for item in response.data['registrations']], [other.ticket_id])
        self.assertNotIn('qrCode', response.data['registrations'][0])
        self.assertEqual(response.data['pagination']['total_items'], 1)

    def test_event_registrations_unknown_event(self):
        url = reverse('tickets:event-registrations', kwargs={'event_id': 999999})
        self.assertEqual(self.staff_client.get(url).status_code, status.HTTP_404_NOT_FOUND)

    def test_stats(self):
        UsedRegistrationFactory(batch=self.batch)

        response = self.staff_client.get(reverse('tickets:ticket-stats'), {'event': self.event.pk})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'total': 2, 'used': 1, 'unused': 1})

    def test_delete(self):
        url = reverse('tickets:ticket-delete', kwargs={'ticket_id': self.registration.ticket_id})

        response = self.staff_client.delete(url)

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Registration.objects.filter(pk=self.registration.pk).exists())

    def test_delete_forbidden_for_attendee(self):
        url = reverse('tickets:ticket-delete', kwargs={'ticket_id': self.registration.ticket_id})

        response = self.user_client.delete(url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Registration.objects.filter(pk=self.registration.pk).exists())


class TicketDeliveryAPIViewTest(EventTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.registration = RegistrationFactory(batch=self.batch)

    @patch('apps.tickets.services.ticket_pdf.TicketPDFRenderer.render', return_value=b'%PDF-1.7 ticket')
    def test_generate_ticket_pdf(self, render):
        url = reverse('tickets:ticket-pdf', kwargs={'ticket_id': self.registration.ticket_id})

        response = self.anonymous_client.get(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Type'], 'application/pdf')
        self.assertEqual(
            response['Content-Disposition'],
            f'attachment; filename="ticket-{self.registration.ticket_id}.pdf"',
        )
        self.assertEqual(response.content, b'%PDF-1.7 ticket')

    def test_generate_ticket_pdf_unknown(self):
        url = reverse('tickets:ticket-pdf', kwargs={'ticket_id': 'TKT-0-UNKNOWN'})
        self.assertEqual(self.anonymous_client.get(url).status_code, status.HTTP_404_NOT_FOUND)

    @patch('apps.tickets.services.registration_service.send_ticket_email_task')
    def test_send_ticket_email(self, email_task):
        response = self.staff_client.post(
            reverse('tickets:ticket-send-email'),
            {'ticketId': self.registration.ticket_id},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(
            response.data,
            {'status': 'queued', 'ticketId': self.registration.ticket_id, 'email': self.registration.email},
        )
        email_task.delay.assert_called_once_with(self.registration.ticket_id)

    def test_send_ticket_email_requires_ticket_id(self):
        response = self.staff_client.post(reverse('tickets:ticket-send-email'), {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
