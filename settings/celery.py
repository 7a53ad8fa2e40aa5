"""Celery configuration for the ticketing project."""

import os

from celery import Celery

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'settings.main')

app = Celery('ticketing')

# Using a string here means the worker doesn't have to serialize
# the configuration object to child processes.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Load task modules from all registered Django apps.
app.autodiscover_tasks()

app.conf.update(
    worker_hijack_root_logger=False,
    worker_log_color=False,
    task_reject_on_worker_lost=True,
)
