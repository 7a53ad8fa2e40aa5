from datetime import date
from datetime import timedelta

import factory

from apps.events.models import Batch
from apps.events.models import Event


class EventFactory(factory.django.DjangoModelFactory):
    """Factory for test events"""

    class Meta:
        model = Event

    name = factory.Sequence(lambda n: f'Conference {n}')
    description = factory.Faker('paragraph', nb_sentences=3)
    date = factory.LazyFunction(lambda: date.today() + timedelta(days=30))
    location = factory.Faker('city')
    total_tickets = 100
    is_active = True


class InactiveEventFactory(EventFactory):
    is_active = False


class BatchFactory(factory.django.DjangoModelFactory):
    """Factory for test batches"""

    class Meta:
        model = Batch

    event = factory.SubFactory(EventFactory)
    name = factory.Sequence(lambda n: f'Batch {n}')
    start_date = factory.LazyFunction(date.today)
    end_date = factory.LazyFunction(lambda: date.today() + timedelta(days=14))
    max_tickets = 50
    is_active = True
