import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from apps.events.serializers import EventCreateSerializer
from apps.events.serializers import EventDetailSerializer
from apps.events.serializers import EventListQuerySerializer
from apps.events.serializers import EventListSerializer
from apps.events.serializers import EventUpdateSerializer
from apps.shared.base.base_api_view import BaseAPIView
from apps.shared.container import get_event_service

logger = logging.getLogger(__name__)


class BaseEventAPIView(BaseAPIView):
    """Base view for event operations"""

    _event_service = None

    def get_event_service(self):
        if self._event_service is None:
            self._event_service = get_event_service()
        return self._event_service


@extend_schema(tags=['Events'])
class EventCreateAPIView(BaseEventAPIView):
    """Create new event"""

    permission_classes = [IsAdminUser]
    serializer_class = EventCreateSerializer

    def post(self, request):
        serializer = EventCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        event = self.get_event_service().create_event(validated_data=serializer.validated_data)

        return Response(EventDetailSerializer(event).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=['Events'])
class EventListAPIView(BaseEventAPIView):
    """Admin list of all events with registration counters"""

    permission_classes = [IsAdminUser]

    def get(self, request):
        query_serializer = EventListQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)

        events_data = self.get_event_service().get_events_list(filters=query_serializer.validated_data)

        response_data = {
            'events': EventListSerializer(events_data['items'], many=True).data,
            'pagination': events_data['meta'],
        }
        return Response(response_data, status=status.HTTP_200_OK)


@extend_schema(tags=['Events'])
class ActiveEventListAPIView(BaseEventAPIView):
    """Events currently open for registration"""

    permission_classes = [AllowAny]

    def get(self, request):
        events = self.get_event_service().get_active_events()
        serializer = EventDetailSerializer(events, many=True)
        return Response({'events': serializer.data}, status=status.HTTP_200_OK)


@extend_schema(tags=['Events'])
class EventDetailAPIView(BaseEventAPIView):
    permission_classes = [AllowAny]

    def get(self, request, event_id):
        event = self.get_event_service().get_event(event_id)
        return Response(EventDetailSerializer(event).data, status=status.HTTP_200_OK)


@extend_schema(tags=['Events'])
class EventUpdateAPIView(BaseEventAPIView):
    permission_classes = [IsAdminUser]
    serializer_class = EventUpdateSerializer

    def put(self, request, event_id):
        serializer = EventUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        event = self.get_event_service().update_event(
            event_id=event_id,
            validated_data=serializer.validated_data,
        )
        return Response(EventDetailSerializer(event).data, status=status.HTTP_200_OK)


@extend_schema(tags=['Events'])
class EventDeleteAPIView(BaseEventAPIView):
    """Delete event together with its batches and registrations"""

    permission_classes = [IsAdminUser]

    def delete(self, request, event_id):
        self.get_event_service().delete_event(event_id)
        logger.info(f'Event {event_id} deleted by user {request.user.id}')
        return Response(status=status.HTTP_204_NO_CONTENT)
