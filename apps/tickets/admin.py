from django.contrib import admin
from django.utils.html import format_html

from .models import Registration


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = [
        'ticket_id',
        'full_name',
        'email',
        'event_link',
        'batch',
        'status_display',
        'used_at',
        'created_at',
    ]

    list_filter = ['status', 'event', 'created_at']

    search_fields = ['ticket_id', 'full_name', 'email', 'phone']

    readonly_fields = ['ticket_id', 'status', 'used_at', 'qr_preview', 'created_at', 'updated_at']

    fieldsets = (
        ('Ticket', {'fields': ('ticket_id', 'event', 'batch', 'status', 'used_at', 'qr_preview')}),
        ('Attendee', {'fields': ('full_name', 'email', 'phone', 'message', 'account')}),
        (
            'System Fields',
            {
                'fields': ('created_at', 'updated_at'),
                'classes': ('collapse',),
            },
        ),
    )

    raw_id_fields = ['account']

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('event', 'batch')

    def event_link(self, obj):
        return format_html('<a href="/admin/events/event/{}/change/">{}</a>', obj.event.id, obj.event.name)

    event_link.short_description = 'Event'

    def status_display(self, obj):
        color = 'red' if obj.is_used else 'green'
        return format_html('<span style="color: {};">{}</span>', color, obj.status)

    status_display.short_description = 'Status'

    def qr_preview(self, obj):
        if not obj.qr_code:
            return '-'
        return format_html('<img src="{}" width="160" height="160">', obj.qr_code)

    qr_preview.short_description = 'QR Code'
