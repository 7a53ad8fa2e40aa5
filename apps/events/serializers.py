"""
Event and Batch serializers.

Write serializers validate admin input; read serializers shape the
public payloads used by the registration form and the admin panel.
"""

from rest_framework import serializers

from apps.events.models.batch import Batch
from apps.events.models.event import Event

# =============================================================================
# EVENT SERIALIZERS
# =============================================================================


class EventCreateSerializer(serializers.ModelSerializer):
    """Create new event"""

    class Meta:
        model = Event
        fields = ['name', 'description', 'date', 'location', 'total_tickets', 'is_active']
        extra_kwargs = {
            'name': {'required': True, 'max_length': 255},
            'description': {'required': False, 'allow_blank': True},
            'date': {'required': True},
            'location': {'required': False, 'allow_blank': True},
            'total_tickets': {'required': False, 'min_value': 0},
            'is_active': {'default': True},
        }

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError('Event name is required')
        return value.strip()


class EventUpdateSerializer(EventCreateSerializer):
    """Update existing event; every field optional"""

    class Meta(EventCreateSerializer.Meta):
        extra_kwargs = {
            'name': {'required': False, 'max_length': 255},
            'description': {'required': False, 'allow_blank': True},
            'date': {'required': False},
            'location': {'required': False, 'allow_blank': True},
            'total_tickets': {'required': False, 'min_value': 0},
            'is_active': {'required': False},
        }


class EventDetailSerializer(serializers.ModelSerializer):
    """Event details"""

    class Meta:
        model = Event
        fields = [
            'id',
            'name',
            'description',
            'date',
            'location',
            'total_tickets',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class EventListSerializer(serializers.ModelSerializer):
    """Event list item with registration counters from annotations"""

    registrations_count = serializers.IntegerField(read_only=True, default=0)
    used_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = Event
        fields = [
            'id',
            'name',
            'date',
            'location',
            'total_tickets',
            'is_active',
            'created_at',
            'registrations_count',
            'used_count',
        ]
        read_only_fields = fields


# =============================================================================
# BATCH SERIALIZERS
# =============================================================================


class BatchCreateSerializer(serializers.ModelSerializer):
    """Create a batch under an event (event comes from the URL)"""

    class Meta:
        model = Batch
        fields = ['name', 'start_date', 'end_date', 'max_tickets', 'is_active']
        extra_kwargs = {
            'name': {'required': True, 'max_length': 255},
            'start_date': {'required': True},
            'end_date': {'required': True},
            'max_tickets': {'required': False, 'min_value': 1},
            'is_active': {'default': True},
        }

    def validate(self, attrs):
        start_date = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end_date = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start_date and end_date and end_date < start_date:
            raise serializers.ValidationError({'end_date': 'End date cannot be before start date'})
        return attrs


class BatchUpdateSerializer(BatchCreateSerializer):
    class Meta(BatchCreateSerializer.Meta):
        extra_kwargs = {
            'name': {'required': False, 'max_length': 255},
            'start_date': {'required': False},
            'end_date': {'required': False},
            'max_tickets': {'required': False, 'min_value': 1},
            'is_active': {'required': False},
        }


class BatchDetailSerializer(serializers.ModelSerializer):
    event_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Batch
        fields = [
            'id',
            'event_id',
            'name',
            'start_date',
            'end_date',
            'max_tickets',
            'is_active',
            'created_at',
        ]
        read_only_fields = fields


# =============================================================================
# QUERY PARAMETER SERIALIZERS
# =============================================================================


class EventListQuerySerializer(serializers.Serializer):
    """Query parameters for event list"""

    page = serializers.IntegerField(default=1, min_value=1)
    page_size = serializers.IntegerField(default=20, min_value=1, max_value=100)
    search = serializers.CharField(required=False, allow_blank=True, max_length=255)
    active_only = serializers.BooleanField(default=False)


class BatchListQuerySerializer(serializers.Serializer):
    active_only = serializers.BooleanField(default=False)
