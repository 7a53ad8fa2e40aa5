import logging

from django.http import HttpResponse
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.permissions import IsAdminUser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.events.exceptions import BatchNotFoundError
from apps.events.exceptions import EventNotFoundError
from apps.shared.base.base_api_view import BaseAPIView
from apps.shared.container import get_registration_issuer
from apps.shared.container import get_registration_service
from apps.shared.container import get_ticket_pdf_renderer
from apps.tickets.exceptions import DuplicateRegistrationError
from apps.tickets.exceptions import RegistrationValidationError
from apps.tickets.serializers import EventRegistrationsQuerySerializer
from apps.tickets.serializers import RegistrationCreateSerializer
from apps.tickets.serializers import RegistrationDetailSerializer
from apps.tickets.serializers import RegistrationListSerializer
from apps.tickets.serializers import TicketReferenceSerializer
from apps.tickets.serializers import TicketStatsQuerySerializer
from apps.tickets.serializers import TicketStatsSerializer
from apps.tickets.services.issuer import AttendeeDetails
from apps.tickets.services.issuer import IssueOutcome

logger = logging.getLogger(__name__)

# issuer field name -> wire field name
WIRE_FIELD_NAMES = {
    'full_name': 'fullName',
    'event_id': 'eventId',
    'batch_id': 'batchId',
}


class BaseTicketAPIView(BaseAPIView):
    """Base view for ticket operations"""

    _registration_service = None

    def get_registration_service(self):
        if self._registration_service is None:
            self._registration_service = get_registration_service()
        return self._registration_service


@extend_schema(tags=['Tickets'])
class RegisterTicketAPIView(BaseTicketAPIView):
    """Register for an event and receive a QR ticket"""

    permission_classes = [AllowAny]
    serializer_class = RegistrationCreateSerializer

    def post(self, request):
        serializer = RegistrationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        attendee = AttendeeDetails(
            full_name=data['fullName'],
            email=data['email'],
            phone=data['phone'],
            message=data['message'],
        )
        result = get_registration_issuer().issue(data['eventId'], data['batchId'], attendee)

        if result.outcome is IssueOutcome.INVALID:
            field_errors = {WIRE_FIELD_NAMES.get(name, name): errors for name, errors in result.field_errors.items()}
            raise RegistrationValidationError(field_errors)
        if result.outcome is IssueOutcome.EVENT_NOT_FOUND:
            raise EventNotFoundError(data['eventId'])
        if result.outcome is IssueOutcome.BATCH_NOT_FOUND:
            raise BatchNotFoundError(data['batchId'])
        if result.outcome is IssueOutcome.DUPLICATE:
            raise DuplicateRegistrationError(email=data['email'].strip().lower(), event_id=data['eventId'])

        return Response(RegistrationDetailSerializer(result.registration).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=['Tickets'])
class TicketDetailAPIView(BaseTicketAPIView):
    permission_classes = [IsAdminUser]

    def get(self, request, ticket_id):
        registration = self.get_registration_service().get_registration(ticket_id)
        return Response(RegistrationDetailSerializer(registration).data, status=status.HTTP_200_OK)


@extend_schema(tags=['Tickets'])
class TicketDeleteAPIView(BaseTicketAPIView):
    """Administrative override: remove a ticket"""

    permission_classes = [IsAdminUser]

    def delete(self, request, ticket_id):
        self.get_registration_service().delete_registration(ticket_id)
        logger.info(f'Ticket {ticket_id} deleted by user {request.user.id}')
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=['Tickets'])
class MyTicketsAPIView(BaseTicketAPIView):
    """Tickets of the signed-in account, newest first"""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        registrations = self.get_registration_service().get_my_registrations(request.user)
        serializer = RegistrationDetailSerializer(registrations, many=True)
        return Response({'registrations': serializer.data}, status=status.HTTP_200_OK)


@extend_schema(tags=['Tickets'])
class EventRegistrationsAPIView(BaseTicketAPIView):
    permission_classes = [IsAdminUser]

    def get(self, request, event_id):
        query_serializer = EventRegistrationsQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)

        page_data = self.get_registration_service().get_event_registrations(
            event_id, query_serializer.validated_data
        )

        response_data = {
            'registrations': RegistrationListSerializer(page_data['items'], many=True).data,
            'pagination': page_data['meta'],
        }
        return Response(response_data, status=status.HTTP_200_OK)


@extend_schema(tags=['Tickets'])
class TicketStatsAPIView(BaseTicketAPIView):
    """Issued / used / unused counters, per event or overall"""

    permission_classes = [IsAdminUser]

    def get(self, request):
        query_serializer = TicketStatsQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)

        stats = self.get_registration_service().get_stats(query_serializer.validated_data.get('event'))
        return Response(TicketStatsSerializer(stats).data, status=status.HTTP_200_OK)


@extend_schema(tags=['Tickets'])
class GenerateTicketPDFAPIView(BaseTicketAPIView):
    """Download the PDF ticket; the ticketId itself is the credential"""

    permission_classes = [AllowAny]

    def get(self, request, ticket_id):
        registration = self.get_registration_service().get_registration(ticket_id)

        renderer = get_ticket_pdf_renderer()
        pdf_bytes = renderer.render(registration)

        response = HttpResponse(pdf_bytes, content_type='application/pdf')
        response['Content-Disposition'] = f'attachment; filename="{renderer.filename(registration)}"'
        return response


@extend_schema(tags=['Tickets'])
class SendTicketEmailAPIView(BaseTicketAPIView):
    """Queue the ticket email again"""

    permission_classes = [IsAdminUser]
    serializer_class = TicketReferenceSerializer

    def post(self, request):
        serializer = TicketReferenceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        registration = self.get_registration_service().resend_ticket_email(serializer.validated_data['ticketId'])
        return Response(
            {'status': 'queued', 'ticketId': registration.ticket_id, 'email': registration.email},
            status=status.HTTP_202_ACCEPTED,
        )
