from django.contrib import admin
from django.db import models
from django.utils import timezone
from django.utils.html import format_html

from .models import Batch
from .models import Event


class BatchInline(admin.TabularInline):
    model = Batch
    extra = 1
    fields = ['name', 'start_date', 'end_date', 'max_tickets', 'is_active']


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    inlines = [BatchInline]

    list_display = [
        'name',
        'date_display',
        'location',
        'registration_stats_display',
        'total_tickets',
        'is_active',
        'created_at',
    ]

    list_filter = ['is_active', 'date', 'created_at']

    search_fields = ['name', 'description', 'location']

    readonly_fields = ['created_at', 'updated_at', 'registration_stats_display']

    fieldsets = (
        ('Basic Information', {'fields': ('name', 'description', 'is_active')}),
        ('Date and Location', {'fields': ('date', 'location')}),
        ('Capacity', {'fields': ('total_tickets', 'registration_stats_display')}),
        (
            'System Fields',
            {
                'fields': ('created_at', 'updated_at'),
                'classes': ('collapse',),
            },
        ),
    )

    actions = ['mark_events_as_active', 'mark_events_as_inactive']

    def get_queryset(self, request):
        return super().get_queryset(request).with_registration_counts()

    def date_display(self, obj):
        now = timezone.now().date()
        if obj.date > now:
            color = 'green'
        elif obj.date == now:
            color = 'orange'
        else:
            color = 'gray'

        return format_html('<span style="color: {};">{}</span>', color, obj.date.strftime('%Y-%m-%d'))

    date_display.short_description = 'Event Date'

    def registration_stats_display(self, obj):
        total = getattr(obj, 'registrations_count', None)
        used = getattr(obj, 'used_count', None)
        if total is None:
            total = obj.registrations.count()
            used = obj.registrations.filter(status='Used').count()
        if total == 0:
            return format_html('<span style="color: gray;">No registrations</span>')
        return format_html('<span>{} issued / {} used</span>', total, used)

    registration_stats_display.short_description = 'Tickets'

    def mark_events_as_active(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'{count} events opened for registration.')

    mark_events_as_active.short_description = 'Open for registration'

    def mark_events_as_inactive(self, request, queryset):
        count = queryset.update(is_active=False)
        self.message_user(request, f'{count} events closed for registration.')

    mark_events_as_inactive.short_description = 'Close registration'


@admin.register(Batch)
class BatchAdmin(admin.ModelAdmin):
    list_display = ['name', 'event_link', 'start_date', 'end_date', 'max_tickets', 'issued_display', 'is_active']
    list_filter = ['is_active', 'start_date']
    search_fields = ['name', 'event__name']

    def get_queryset(self, request):
        return (
            super()
            .get_queryset(request)
            .select_related('event')
            .annotate(issued_count=models.Count('registrations'))
        )

    def event_link(self, obj):
        return format_html('<a href="/admin/events/event/{}/change/">{}</a>', obj.event.id, obj.event.name)

    event_link.short_description = 'Event'

    def issued_display(self, obj):
        return obj.issued_count

    issued_display.short_description = 'Issued'
