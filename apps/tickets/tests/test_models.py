from django.core.exceptions import ValidationError
from django.db import IntegrityError
from django.db import transaction
from django.test import TestCase
from django.utils import timezone

from apps.events.tests.factories import BatchFactory
from apps.tickets.models import Registration
from apps.tickets.tests.factories import RegistrationFactory
from apps.tickets.tests.factories import UsedRegistrationFactory


class RegistrationModelTest(TestCase):
    def test_defaults(self):
        registration = RegistrationFactory()

        self.assertEqual(registration.status, Registration.Status.UNUSED)
        self.assertFalse(registration.is_used)
        self.assertIsNone(registration.used_at)
        self.assertIsNone(registration.account)

    def test_save_normalizes_contact_fields(self):
        registration = RegistrationFactory(full_name=' Grace Hopper ', email=' Grace@Example.COM ', phone=' 0712345678 ')

        self.assertEqual(registration.full_name, 'Grace Hopper')
        self.assertEqual(registration.email, 'grace@example.com')
        self.assertEqual(registration.phone, '0712345678')

    def test_status_outside_enum_rejected_on_save(self):
        registration = RegistrationFactory()
        registration.status = 'Scanned'

        with self.assertRaises(ValidationError):
            registration.save()

    def test_used_requires_timestamp(self):
        with self.assertRaises(ValidationError):
            RegistrationFactory(status=Registration.Status.USED, used_at=None)

    def test_unused_cannot_carry_timestamp(self):
        with self.assertRaises(ValidationError):
            RegistrationFactory(used_at=timezone.now())

    def test_batch_must_belong_to_event(self):
        foreign_batch = BatchFactory()

        with self.assertRaises(ValidationError):
            RegistrationFactory(event=BatchFactory().event, batch=foreign_batch)

    def test_database_rejects_unknown_status(self):
        registration = RegistrationFactory()

        with self.assertRaises(IntegrityError), transaction.atomic():
            Registration.objects.filter(pk=registration.pk).update(status='Bogus')

    def test_database_rejects_used_without_timestamp(self):
        registration = RegistrationFactory()

        with self.assertRaises(IntegrityError), transaction.atomic():
            Registration.objects.filter(pk=registration.pk).update(status=Registration.Status.USED)

    def test_ticket_id_unique(self):
        registration = RegistrationFactory()

        with self.assertRaises(IntegrityError), transaction.atomic():
            RegistrationFactory(ticket_id=registration.ticket_id)

    def test_queryset_counters(self):
        batch = BatchFactory()
        RegistrationFactory.create_batch(3, batch=batch)
        UsedRegistrationFactory.create_batch(2, batch=batch)
        RegistrationFactory()

        counters = Registration.objects.for_event(batch.event_id).counters()

        self.assertEqual(counters, {'total': 5, 'used': 2, 'unused': 3})

    def test_queryset_search(self):
        target = RegistrationFactory(full_name='Katherine Johnson', email='kj@nasa.example', phone='0799111222')
        RegistrationFactory(full_name='Someone Else')

        for term in ('katherine', 'NASA.example', '0799111', target.ticket_id[-6:].lower()):
            with self.subTest(term=term):
                self.assertEqual(list(Registration.objects.search(term)), [target])

    def test_manager_exposes_queryset_methods(self):
        used = UsedRegistrationFactory(full_name='Mary Jackson')
        unused = RegistrationFactory(batch=used.batch)

        self.assertEqual(list(Registration.objects.used()), [used])
        self.assertEqual(list(Registration.objects.unused()), [unused])
        self.assertEqual(list(Registration.objects.for_batch(used.batch_id).search('mary')), [used])
        self.assertEqual(Registration.objects.counters(), {'total': 2, 'used': 1, 'unused': 1})

    def test_deleting_event_removes_registrations(self):
        registration = RegistrationFactory()

        registration.event.delete()

        self.assertFalse(Registration.objects.filter(pk=registration.pk).exists())
