from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from apps.events.serializers import BatchCreateSerializer
from apps.events.serializers import BatchDetailSerializer
from apps.events.serializers import BatchListQuerySerializer
from apps.events.serializers import BatchUpdateSerializer
from apps.shared.base.base_api_view import BaseAPIView
from apps.shared.container import get_batch_service


class BaseBatchAPIView(BaseAPIView):
    _batch_service = None

    def get_batch_service(self):
        if self._batch_service is None:
            self._batch_service = get_batch_service()
        return self._batch_service


@extend_schema(tags=['Batches'])
class BatchListAPIView(BaseBatchAPIView):
    """Batches of an event; the registration form uses ?active_only=true"""

    permission_classes = [AllowAny]

    def get(self, request, event_id):
        query_serializer = BatchListQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)

        batches = self.get_batch_service().get_event_batches(
            event_id, active_only=query_serializer.validated_data['active_only']
        )
        return Response({'batches': BatchDetailSerializer(batches, many=True).data}, status=status.HTTP_200_OK)


@extend_schema(tags=['Batches'])
class BatchCreateAPIView(BaseBatchAPIView):
    permission_classes = [IsAdminUser]
    serializer_class = BatchCreateSerializer

    def post(self, request, event_id):
        serializer = BatchCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        batch = self.get_batch_service().create_batch(event_id, serializer.validated_data)
        return Response(BatchDetailSerializer(batch).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=['Batches'])
class BatchUpdateAPIView(BaseBatchAPIView):
    permission_classes = [IsAdminUser]
    serializer_class = BatchUpdateSerializer

    def put(self, request, batch_id):
        service = self.get_batch_service()
        batch = service.get_batch(batch_id)

        serializer = BatchUpdateSerializer(instance=batch, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        updated = service.update_batch(batch_id, serializer.validated_data)
        return Response(BatchDetailSerializer(updated).data, status=status.HTTP_200_OK)


@extend_schema(tags=['Batches'])
class BatchDeleteAPIView(BaseBatchAPIView):
    permission_classes = [IsAdminUser]

    def delete(self, request, batch_id):
        self.get_batch_service().delete_batch(batch_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
