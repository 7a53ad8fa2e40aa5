from apps.tickets.views.ticket_views import EventRegistrationsAPIView
from apps.tickets.views.ticket_views import GenerateTicketPDFAPIView
from apps.tickets.views.ticket_views import MyTicketsAPIView
from apps.tickets.views.ticket_views import RegisterTicketAPIView
from apps.tickets.views.ticket_views import SendTicketEmailAPIView
from apps.tickets.views.ticket_views import TicketDeleteAPIView
from apps.tickets.views.ticket_views import TicketDetailAPIView
from apps.tickets.views.ticket_views import TicketStatsAPIView
from apps.tickets.views.verification_views import VerifyTicketAPIView

__all__ = [
    'EventRegistrationsAPIView',
    'GenerateTicketPDFAPIView',
    'MyTicketsAPIView',
    'RegisterTicketAPIView',
    'SendTicketEmailAPIView',
    'TicketDeleteAPIView',
    'TicketDetailAPIView',
    'TicketStatsAPIView',
    'VerifyTicketAPIView',
]
