import logging

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from apps.shared.base.base_api_view import BaseAPIView
from apps.shared.container import get_redemption_gate

logger = logging.getLogger(__name__)


@extend_schema(tags=['Check-in'])
class VerifyTicketAPIView(BaseAPIView):
    """
    Redeem a scanned ticket.

    Body: {"ticketId": "<scanned text>"}. Every outcome, including a storage
    failure, is answered with a {"status": ...} body; see RedemptionResult.
    """

    permission_classes = [IsAdminUser]

    def post(self, request):
        raw_scan = request.data.get('ticketId') if isinstance(request.data, dict) else None

        result = get_redemption_gate().redeem(raw_scan)
        logger.info(f'Scan by user {request.user.id}: {result.outcome.value}')
        return Response(result.to_payload(), status=result.http_status)
