from django.urls import path

from apps.tickets.views import EventRegistrationsAPIView
from apps.tickets.views import GenerateTicketPDFAPIView
from apps.tickets.views import MyTicketsAPIView
from apps.tickets.views import RegisterTicketAPIView
from apps.tickets.views import SendTicketEmailAPIView
from apps.tickets.views import TicketDeleteAPIView
from apps.tickets.views import TicketDetailAPIView
from apps.tickets.views import TicketStatsAPIView
from apps.tickets.views import VerifyTicketAPIView

app_name = 'tickets'


urlpatterns = [
    path('register/', RegisterTicketAPIView.as_view(), name='ticket-register'),  # POST
    path('verify/', VerifyTicketAPIView.as_view(), name='ticket-verify'),  # POST
    path('my/', MyTicketsAPIView.as_view(), name='my-tickets'),  # GET
    path('stats/', TicketStatsAPIView.as_view(), name='ticket-stats'),  # GET ?event=
    path('send-ticket-email/', SendTicketEmailAPIView.as_view(), name='ticket-send-email'),  # POST
    path('event/<int:event_id>/', EventRegistrationsAPIView.as_view(), name='event-registrations'),  # GET
    path('generate-ticket/<str:ticket_id>/', GenerateTicketPDFAPIView.as_view(), name='ticket-pdf'),  # GET
    path('<str:ticket_id>/delete/', TicketDeleteAPIView.as_view(), name='ticket-delete'),  # DELETE
    path('<str:ticket_id>/', TicketDetailAPIView.as_view(), name='ticket-detail'),  # GET
]
