"""
Test helpers shared by the events and tickets apps.
"""

from django.core.cache import cache
from rest_framework.test import APIClient

from apps.accounts.tests.factories import StaffUserFactory
from apps.accounts.tests.factories import UserFactory
from apps.events.tests.factories import BatchFactory
from apps.events.tests.factories import EventFactory


class EventTestMixin:
    """Mixin with an event, a batch and API clients for each role"""

    def setUp(self):
        super().setUp()
        cache.clear()
        self.event = EventFactory()
        self.batch = BatchFactory(event=self.event)
        self.staff_user = StaffUserFactory()
        self.user = UserFactory()

        self.anonymous_client = APIClient()
        self.staff_client = APIClient()
        self.staff_client.force_authenticate(user=self.staff_user)
        self.user_client = APIClient()
        self.user_client.force_authenticate(user=self.user)


def assert_max_database_queries(test_case, max_queries, func, *args, **kwargs):
    """Checks that func runs at most max_queries database queries"""
    from django.db import connection
    from django.test.utils import CaptureQueriesContext

    with CaptureQueriesContext(connection) as context:
        result = func(*args, **kwargs)

    test_case.assertLessEqual(
        len(context.captured_queries),
        max_queries,
        f'Function executed {len(context.captured_queries)} database queries, expected max {max_queries}',
    )
    return result
