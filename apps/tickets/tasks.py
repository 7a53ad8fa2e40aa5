import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.core.mail import send_mail
from django.template.loader import render_to_string
from django.utils import timezone
from django.utils.html import strip_tags

from apps.tickets.models.registration import Registration
from apps.tickets.services.ticket_pdf import TicketPDFRenderer
from settings.celery import app

logger = logging.getLogger(__name__)


def _get_registration(ticket_id: str) -> Registration | None:
    return Registration.objects.with_relations().filter(ticket_id=ticket_id).first()


def build_download_url(ticket_id: str) -> str:
    base_url = getattr(settings, 'TICKETS_PUBLIC_BASE_URL', 'http://localhost:8000').rstrip('/')
    return f'{base_url}/api/tickets/generate-ticket/{ticket_id}/'


def _brand() -> str:
    return getattr(settings, 'TICKETS_EMAIL_BRAND', 'TicketLelo')


@app.task(bind=True)
def send_ticket_email_task(self, ticket_id: str):
    """
    Email the attendee their ticket as a PDF attachment.

    Args:
        ticket_id: ticketId of the Registration

    Returns:
        dict with status
    """
    registration = _get_registration(ticket_id)
    if registration is None:
        logger.warning(f'Ticket email skipped, ticket {ticket_id} no longer exists')
        return {'status': 'skipped', 'ticket_id': ticket_id}

    try:
        renderer = TicketPDFRenderer()
        pdf_bytes = renderer.render(registration)

        context = {
            'brand': _brand(),
            'registration': registration,
            'event': registration.event,
            'batch': registration.batch,
            'download_url': build_download_url(ticket_id),
        }
        html_body = render_to_string('tickets/emails/ticket_email.html', context)

        message = EmailMultiAlternatives(
            subject=f'Your Ticket for {registration.event.name} - {_brand()}',
            body=strip_tags(html_body),
            from_email=getattr(settings, 'DEFAULT_FROM_EMAIL', None),
            to=[registration.email],
        )
        message.attach_alternative(html_body, 'text/html')
        message.attach(renderer.filename(registration), pdf_bytes, 'application/pdf')
        message.send(fail_silently=False)

        logger.info(f'Ticket email sent for {ticket_id} to {registration.email}')
        return {'status': 'success', 'ticket_id': ticket_id, 'email': registration.email}

    except Exception as e:
        logger.exception(f'Failed to send ticket email for {ticket_id}: {e}')
        raise self.retry(
            countdown=60,
            max_retries=3,
            exc=e,
        )


@app.task(bind=True)
def send_ticket_used_notification_task(self, ticket_id: str):
    """Tell the attendee their ticket was scanned; failures are not retried"""
    registration = _get_registration(ticket_id)
    if registration is None or registration.used_at is None:
        return {'status': 'skipped', 'ticket_id': ticket_id}

    event_name = registration.event.name
    used_at = timezone.localtime(registration.used_at).strftime('%Y-%m-%d %H:%M')
    try:
        send_mail(
            subject=f'Ticket Used - {event_name}',
            message=(
                f'Hi {registration.full_name},\n\n'
                f'Your ticket for {event_name} was used on {used_at}.\n\n'
                f'Thank you for attending!\n\n-- {_brand()}'
            ),
            from_email=getattr(settings, 'DEFAULT_FROM_EMAIL', None),
            recipient_list=[registration.email],
            fail_silently=False,
        )
    except Exception as e:
        logger.warning(f'Non-critical: ticket used notification for {ticket_id} failed: {e}')
        return {'status': 'error', 'ticket_id': ticket_id, 'message': str(e)}

    logger.info(f'Ticket used notification sent for {ticket_id}')
    return {'status': 'success', 'ticket_id': ticket_id}


@app.task(bind=True)
def send_admin_registration_notification_task(self, ticket_id: str):
    """Notify the organizer about a new registration; failures are not retried"""
    admin_email = getattr(settings, 'TICKETS_ADMIN_EMAIL', '')
    if not admin_email:
        return {'status': 'skipped', 'ticket_id': ticket_id}

    registration = _get_registration(ticket_id)
    if registration is None:
        return {'status': 'skipped', 'ticket_id': ticket_id}

    event_name = registration.event.name
    registered_at = timezone.localtime(registration.created_at).strftime('%Y-%m-%d %H:%M')
    try:
        send_mail(
            subject=f'New Registration - {event_name}',
            message=(
                'New registration received:\n\n'
                f'Registrant: {registration.full_name}\n'
                f'Email: {registration.email}\n'
                f'Event: {event_name}\n'
                f'Batch: {registration.batch.name}\n'
                f'Time: {registered_at}'
            ),
            from_email=getattr(settings, 'DEFAULT_FROM_EMAIL', None),
            recipient_list=[admin_email],
            fail_silently=False,
        )
    except Exception as e:
        logger.warning(f'Non-critical: admin notification for {ticket_id} failed: {e}')
        return {'status': 'error', 'ticket_id': ticket_id, 'message': str(e)}

    logger.info(f'Admin notified about registration {ticket_id}')
    return {'status': 'success', 'ticket_id': ticket_id}
