import logging

from django.conf import settings
from django.template.loader import render_to_string

from apps.tickets.exceptions import TicketRenderingError
from apps.tickets.models.registration import Registration
from apps.tickets.utils.qr_utils import TicketQRCodeGenerator

logger = logging.getLogger(__name__)

TICKET_TEMPLATE = 'tickets/ticket_pdf.html'

PAGE_CSS = """
    @page {
        size: A4 portrait;
        margin: 1cm;
    }
"""


class TicketPDFRenderer:
    """Renders a Registration as a printable PDF entry pass"""

    def __init__(self, qr_generator=None):
        self.qr_generator = qr_generator or TicketQRCodeGenerator()

    @staticmethod
    def filename(registration: Registration) -> str:
        return f'ticket-{registration.ticket_id}.pdf'

    def build_context(self, registration: Registration) -> dict:
        event = registration.event
        batch = registration.batch
        return {
            'brand': getattr(settings, 'TICKETS_EMAIL_BRAND', 'TicketLelo'),
            'registration': registration,
            'event': event,
            'batch': batch,
            'is_used': registration.is_used,
            'qr_code': registration.qr_code or self.qr_generator.generate_data_url(registration.ticket_id),
        }

    def render_html(self, registration: Registration) -> str:
        return render_to_string(TICKET_TEMPLATE, self.build_context(registration))

    def render(self, registration: Registration) -> bytes:
        """
        Convert the ticket template to PDF bytes using WeasyPrint.

        Raises:
            TicketRenderingError: the PDF engine is missing or failed
        """
        html_content = self.render_html(registration)

        try:
            from weasyprint import CSS
            from weasyprint import HTML

            pdf_bytes = HTML(string=html_content).write_pdf(stylesheets=[CSS(string=PAGE_CSS)])
        except ImportError as e:
            logger.error('WeasyPrint not installed')
            raise TicketRenderingError(registration.ticket_id) from e
        except Exception as e:
            logger.exception(f'Error converting ticket {registration.ticket_id} to PDF: {e}')
            raise TicketRenderingError(registration.ticket_id) from e

        logger.debug(f'Rendered PDF for {registration.ticket_id} ({len(pdf_bytes)} bytes)')
        return pdf_bytes
