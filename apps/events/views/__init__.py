from apps.events.views.batch_views import BatchCreateAPIView
from apps.events.views.batch_views import BatchDeleteAPIView
from apps.events.views.batch_views import BatchListAPIView
from apps.events.views.batch_views import BatchUpdateAPIView
from apps.events.views.event_views import ActiveEventListAPIView
from apps.events.views.event_views import BaseEventAPIView
from apps.events.views.event_views import EventCreateAPIView
from apps.events.views.event_views import EventDeleteAPIView
from apps.events.views.event_views import EventDetailAPIView
from apps.events.views.event_views import EventListAPIView
from apps.events.views.event_views import EventUpdateAPIView

__all__ = [
    'ActiveEventListAPIView',
    'BaseEventAPIView',
    'BatchCreateAPIView',
    'BatchDeleteAPIView',
    'BatchListAPIView',
    'BatchUpdateAPIView',
    'EventCreateAPIView',
    'EventDeleteAPIView',
    'EventDetailAPIView',
    'EventListAPIView',
    'EventUpdateAPIView',
]
