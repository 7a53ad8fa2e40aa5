from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.events.models.batch import Batch
from apps.events.models.event import Event
from apps.shared.base.models import BaseModel


class RegistrationQuerySet(models.QuerySet):
    def for_event(self, event_id):
        return self.filter(event_id=event_id)

    def for_batch(self, batch_id):
        return self.filter(batch_id=batch_id)

    def used(self):
        return self.filter(status=Registration.Status.USED)

    def unused(self):
        return self.filter(status=Registration.Status.UNUSED)

    def search(self, search_term):
        """Case-insensitive match on name, email, phone or ticketId"""
        if not search_term:
            return self
        return self.filter(
            models.Q(full_name__icontains=search_term)
            | models.Q(email__icontains=search_term)
            | models.Q(phone__icontains=search_term)
            | models.Q(ticket_id__icontains=search_term)
        )

    def with_relations(self):
        return self.select_related('event', 'batch')

    def counters(self):
        """{total, used, unused} in one aggregate query"""
        return self.aggregate(
            total=models.Count('id'),
            used=models.Count('id', filter=models.Q(status=Registration.Status.USED)),
            unused=models.Count('id', filter=models.Q(status=Registration.Status.UNUSED)),
        )


class RegistrationManager(models.Manager.from_queryset(RegistrationQuerySet)):
    """Every RegistrationQuerySet method is available on Registration.objects"""


class Registration(BaseModel):
    """
    One attendee's ticket for one event.

    ``ticket_id`` is what the QR code encodes. Status only ever moves from
    Unused to Used, and ``used_at`` is present exactly when it is Used.
    """

    class Status(models.TextChoices):
        UNUSED = 'Unused', _('Unused')
        USED = 'Used', _('Used')

    ticket_id = models.CharField(_('Ticket ID'), max_length=64, unique=True, editable=False)

    event = models.ForeignKey(
        Event,
        on_delete=models.CASCADE,
        related_name='registrations',
        verbose_name=_('Event'),
    )

    batch = models.ForeignKey(
        Batch,
        on_delete=models.CASCADE,
        related_name='registrations',
        verbose_name=_('Batch'),
    )

    account = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='registrations',
        verbose_name=_('Account'),
        help_text=_('Account resolved from the attendee email'),
    )

    full_name = models.CharField(_('Full Name'), max_length=255)

    email = models.EmailField(_('Email'), db_index=True)

    phone = models.CharField(_('Phone'), max_length=32)

    message = models.TextField(_('Message'), blank=True, default='')

    status = models.CharField(
        _('Status'),
        max_length=10,
        choices=Status.choices,
        default=Status.UNUSED,
        db_index=True,
    )

    used_at = models.DateTimeField(_('Used At'), null=True, blank=True)

    qr_code = models.TextField(_('QR Code'), blank=True, default='', help_text=_('PNG data URL'))

    objects = RegistrationManager()

    class Meta:
        verbose_name = _('Registration')
        verbose_name_plural = _('Registrations')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['event', 'email'], name='tickets_event_email_idx'),
            models.Index(fields=['event', 'status'], name='tickets_event_status_idx'),
            models.Index(fields=['account', '-created_at'], name='tickets_account_created_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(status__in=['Unused', 'Used']),
                name='tickets_status_valid',
            ),
            models.CheckConstraint(
                condition=(
                    models.Q(status='Unused', used_at__isnull=True)
                    | models.Q(status='Used', used_at__isnull=False)
                ),
                name='tickets_used_at_matches_status',
            ),
        ]

    def __str__(self):
        return f'{self.ticket_id} ({self.full_name})'

    @property
    def is_used(self) -> bool:
        return self.status == self.Status.USED

    def clean(self):
        super().clean()
        errors = {}

        if self.status not in self.Status.values:
            errors['status'] = _('Status must be Unused or Used')
        elif self.status == self.Status.USED and self.used_at is None:
            errors['used_at'] = _('Used tickets must record when they were used')
        elif self.status == self.Status.UNUSED and self.used_at is not None:
            errors['used_at'] = _('Unused tickets cannot have a used timestamp')

        if self.batch_id and self.event_id and self.batch.event_id != self.event_id:
            errors['batch'] = _('Batch does not belong to the event')

        if errors:
            raise ValidationError(errors)

    def save(self, *args, **kwargs):
        if self.full_name:
            self.full_name = self.full_name.strip()
        if self.email:
            self.email = self.email.strip().lower()
        if self.phone:
            self.phone = self.phone.strip()
        if self.message:
            self.message = self.message.strip()

        self.clean()
        super().save(*args, **kwargs)
