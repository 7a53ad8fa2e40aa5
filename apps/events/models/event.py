from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.shared.base.models import BaseModel


class EventQuerySet(models.QuerySet):
    """QuerySet for events with filtering helpers"""

    def active(self):
        return self.filter(is_active=True)

    def search(self, search_term):
        """Apply search filter to events"""
        if not search_term:
            return self
        return self.filter(
            models.Q(name__icontains=search_term)
            | models.Q(description__icontains=search_term)
            | models.Q(location__icontains=search_term)
        )

    def with_registration_counts(self):
        """Annotate issued/used ticket counts"""
        return self.annotate(
            registrations_count=models.Count('registrations'),
            used_count=models.Count('registrations', filter=models.Q(registrations__status='Used')),
        )


class EventManager(models.Manager):
    """Custom manager for events"""

    def get_queryset(self):
        return EventQuerySet(self.model, using=self._db)

    def active(self):
        return self.get_queryset().active()

    def search(self, search_term):
        return self.get_queryset().search(search_term)


class Event(BaseModel):
    """
    One occasion attendees can register for.

    ``total_tickets`` is informational: issuance never checks it.
    """

    name = models.CharField(_('Event Name'), max_length=255, db_index=True)

    description = models.TextField(_('Description'), blank=True, default='')

    date = models.DateField(_('Event Date'), db_index=True)

    location = models.CharField(_('Location'), max_length=255, blank=True, default='')

    total_tickets = models.PositiveIntegerField(
        _('Total Tickets'),
        default=0,
        help_text=_('Advertised capacity, not enforced on registration'),
    )

    is_active = models.BooleanField(_('Active'), default=True)

    objects = EventManager()

    class Meta:
        verbose_name = _('Event')
        verbose_name_plural = _('Events')
        ordering = ['date', 'name']
        indexes = [
            models.Index(fields=['is_active', 'date'], name='events_active_date_idx'),
        ]

    def __str__(self):
        return f'{self.name} ({self.date})'

    def clean(self):
        super().clean()
        if not (self.name or '').strip():
            raise ValidationError({'name': _('Event name is required')})

    def save(self, *args, **kwargs):
        if self.name:
            self.name = self.name.strip()
        if self.description:
            self.description = self.description.strip()
        if self.location:
            self.location = self.location.strip()

        self.clean()
        super().save(*args, **kwargs)
