from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.events.models.event import Event
from apps.shared.base.models import BaseModel


class BatchQuerySet(models.QuerySet):
    def for_event(self, event_id):
        return self.filter(event_id=event_id)

    def active(self):
        return self.filter(is_active=True)


class BatchManager(models.Manager):
    def get_queryset(self):
        return BatchQuerySet(self.model, using=self._db)

    def for_event(self, event_id):
        return self.get_queryset().for_event(event_id)


class Batch(BaseModel):
    """
    Named sub-allocation of an event (e.g. "Morning session").

    ``max_tickets`` is informational like Event.total_tickets.
    """

    event = models.ForeignKey(
        Event,
        on_delete=models.CASCADE,
        related_name='batches',
        verbose_name=_('Event'),
    )

    name = models.CharField(_('Batch Name'), max_length=255)

    start_date = models.DateField(_('Start Date'))

    end_date = models.DateField(_('End Date'))

    max_tickets = models.PositiveIntegerField(
        _('Max Tickets'),
        default=1,
        validators=[MinValueValidator(1)],
    )

    is_active = models.BooleanField(_('Active'), default=True)

    objects = BatchManager()

    class Meta:
        verbose_name = _('Batch')
        verbose_name_plural = _('Batches')
        ordering = ['start_date', 'name']
        indexes = [
            models.Index(fields=['event', 'is_active'], name='events_batch_active_idx'),
        ]

    def __str__(self):
        return f'{self.name} ({self.event.name})'

    def clean(self):
        super().clean()
        errors = {}

        if not (self.name or '').strip():
            errors['name'] = _('Batch name is required')
        if self.max_tickets is not None and self.max_tickets < 1:
            errors['max_tickets'] = _('Max tickets must be at least 1')
        if self.start_date and self.end_date and self.end_date < self.start_date:
            errors['end_date'] = _('End date cannot be before start date')

        if errors:
            raise ValidationError(errors)

    def save(self, *args, **kwargs):
        if self.name:
            self.name = self.name.strip()

        self.clean()
        super().save(*args, **kwargs)
