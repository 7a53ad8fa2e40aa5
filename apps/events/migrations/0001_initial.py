import django.core.validators
import django.db.models.deletion
from django.db import migrations
from django.db import models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(db_index=True, max_length=255, verbose_name='Event Name')),
                ('description', models.TextField(blank=True, default='', verbose_name='Description')),
                ('date', models.DateField(db_index=True, verbose_name='Event Date')),
                ('location', models.CharField(blank=True, default='', max_length=255, verbose_name='Location')),
                (
                    'total_tickets',
                    models.PositiveIntegerField(
                        default=0,
                        help_text='Advertised capacity, not enforced on registration',
                        verbose_name='Total Tickets',
                    ),
                ),
                ('is_active', models.BooleanField(default=True, verbose_name='Active')),
            ],
            options={
                'verbose_name': 'Event',
                'verbose_name_plural': 'Events',
                'ordering': ['date', 'name'],
                'indexes': [models.Index(fields=['is_active', 'date'], name='events_active_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='Batch',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=255, verbose_name='Batch Name')),
                ('start_date', models.DateField(verbose_name='Start Date')),
                ('end_date', models.DateField(verbose_name='End Date')),
                (
                    'max_tickets',
                    models.PositiveIntegerField(
                        default=1,
                        validators=[django.core.validators.MinValueValidator(1)],
                        verbose_name='Max Tickets',
                    ),
                ),
                ('is_active', models.BooleanField(default=True, verbose_name='Active')),
                (
                    'event',
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name='batches',
                        to='events.event',
                        verbose_name='Event',
                    ),
                ),
            ],
            options={
                'verbose_name': 'Batch',
                'verbose_name_plural': 'Batches',
                'ordering': ['start_date', 'name'],
                'indexes': [models.Index(fields=['event', 'is_active'], name='events_batch_active_idx')],
            },
        ),
    ]
