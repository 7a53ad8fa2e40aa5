import django.db.models.deletion
from django.conf import settings
from django.db import migrations
from django.db import models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('events', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Registration',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('ticket_id', models.CharField(editable=False, max_length=64, unique=True, verbose_name='Ticket ID')),
                ('full_name', models.CharField(max_length=255, verbose_name='Full Name')),
                ('email', models.EmailField(db_index=True, max_length=254, verbose_name='Email')),
                ('phone', models.CharField(max_length=32, verbose_name='Phone')),
                ('message', models.TextField(blank=True, default='', verbose_name='Message')),
                (
                    'status',
                    models.CharField(
                        choices=[('Unused', 'Unused'), ('Used', 'Used')],
                        db_index=True,
                        default='Unused',
                        max_length=10,
                        verbose_name='Status',
                    ),
                ),
                ('used_at', models.DateTimeField(blank=True, null=True, verbose_name='Used At')),
                ('qr_code', models.TextField(blank=True, default='', help_text='PNG data URL', verbose_name='QR Code')),
                (
                    'account',
                    models.ForeignKey(
                        blank=True,
                        help_text='Account resolved from the attendee email',
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name='registrations',
                        to=settings.AUTH_USER_MODEL,
                        verbose_name='Account',
                    ),
                ),
                (
                    'batch',
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name='registrations',
                        to='events.batch',
                        verbose_name='Batch',
                    ),
                ),
                (
                    'event',
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name='registrations',
                        to='events.event',
                        verbose_name='Event',
                    ),
                ),
            ],
            options={
                'verbose_name': 'Registration',
                'verbose_name_plural': 'Registrations',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['event', 'email'], name='tickets_event_email_idx'),
                    models.Index(fields=['event', 'status'], name='tickets_event_status_idx'),
                    models.Index(fields=['account', '-created_at'], name='tickets_account_created_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(('status__in', ['Unused', 'Used'])),
                        name='tickets_status_valid',
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(('status', 'Unused'), ('used_at__isnull', True)),
                            models.Q(('status', 'Used'), ('used_at__isnull', False)),
                            _connector='OR',
                        ),
                        name='tickets_used_at_matches_status',
                    ),
                ],
            },
        ),
    ]
