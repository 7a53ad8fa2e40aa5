"""
Ticket serializers.

The ticket API speaks camelCase (ticketId, fullName, usedAt).
"""

from rest_framework import serializers

from apps.tickets.models.registration import Registration

# =============================================================================
# INPUT SERIALIZERS
# =============================================================================


class RegistrationCreateSerializer(serializers.Serializer):
    """
    Shape of a registration submission.

    Only types are checked here; RegistrationIssuer owns the field rules so
    every caller gets the same per-field errors.
    """

    fullName = serializers.CharField(required=False, allow_blank=True, default='')
    email = serializers.CharField(required=False, allow_blank=True, default='')
    phone = serializers.CharField(required=False, allow_blank=True, default='')
    message = serializers.CharField(required=False, allow_blank=True, default='')
    eventId = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    batchId = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)


class TicketReferenceSerializer(serializers.Serializer):
    ticketId = serializers.CharField(max_length=64)


class EventRegistrationsQuerySerializer(serializers.Serializer):
    """Query parameters for the admin registration list"""

    batch = serializers.IntegerField(required=False, min_value=1)
    search = serializers.CharField(required=False, allow_blank=True, max_length=255)
    page = serializers.IntegerField(default=1, min_value=1)
    page_size = serializers.IntegerField(default=20, min_value=1, max_value=100)


class TicketStatsQuerySerializer(serializers.Serializer):
    event = serializers.IntegerField(required=False, min_value=1)


# =============================================================================
# OUTPUT SERIALIZERS
# =============================================================================


class RegistrationListSerializer(serializers.ModelSerializer):
    """Registration row without the QR image"""

    ticketId = serializers.CharField(source='ticket_id', read_only=True)
    eventId = serializers.IntegerField(source='event_id', read_only=True)
    eventName = serializers.CharField(source='event.name', read_only=True)
    batchId = serializers.IntegerField(source='batch_id', read_only=True)
    batchName = serializers.CharField(source='batch.name', read_only=True)
    fullName = serializers.CharField(source='full_name', read_only=True)
    usedAt = serializers.DateTimeField(source='used_at', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Registration
        fields = [
            'id',
            'ticketId',
            'eventId',
            'eventName',
            'batchId',
            'batchName',
            'fullName',
            'email',
            'phone',
            'message',
            'status',
            'usedAt',
            'createdAt',
        ]
        read_only_fields = fields


class RegistrationDetailSerializer(RegistrationListSerializer):
    """Registration with its QR code, used by ticket cards and lookups"""

    qrCode = serializers.CharField(source='qr_code', read_only=True)
    eventDate = serializers.DateField(source='event.date', read_only=True)
    eventLocation = serializers.CharField(source='event.location', read_only=True)

    class Meta(RegistrationListSerializer.Meta):
        fields = [*RegistrationListSerializer.Meta.fields, 'eventDate', 'eventLocation', 'qrCode']
        read_only_fields = fields


class TicketStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    used = serializers.IntegerField()
    unused = serializers.IntegerField()
