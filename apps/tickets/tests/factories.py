import factory
from django.utils import timezone

from apps.events.tests.factories import BatchFactory
from apps.tickets.models import Registration
from apps.tickets.utils.ticket_id import generate_ticket_id


class RegistrationFactory(factory.django.DjangoModelFactory):
    """Unused ticket; QR image left empty unless a test needs it"""

    class Meta:
        model = Registration

    batch = factory.SubFactory(BatchFactory)
    event = factory.SelfAttribute('batch.event')
    ticket_id = factory.LazyFunction(generate_ticket_id)
    full_name = factory.Faker('name')
    email = factory.Sequence(lambda n: f'attendee{n}@example.com')
    phone = factory.Sequence(lambda n: f'+2547000{n:05d}')
    message = ''
    status = Registration.Status.UNUSED
    used_at = None


class UsedRegistrationFactory(RegistrationFactory):
    status = Registration.Status.USED
    used_at = factory.LazyFunction(timezone.now)
