# backend/config/celery.py
import os
from celery import Celery
from celery.schedules import crontab

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.prod')

app = Celery('luxeplus')

# Using a string here means the worker doesn't have to serialize
# the configuration object to child processes.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Load task modules from all registered Django apps.
app.autodiscover_tasks()

CELERY_BEAT_SCHEDULE = {
    'cancel-stale-unpaid-orders': {
        'task': 'apps.ecommerce.tasks.cancel_stale_unpaid_orders',
        'schedule': crontab(minute=0),  # Every hour
    },
}

app.conf.beat_schedule = CELERY_BEAT_SCHEDULE

app.conf.task_routes = {
    'apps.ecommerce.tasks.send_*': {'queue': 'emails'},
    'apps.ecommerce.tasks.cancel_stale_unpaid_orders': {'queue': 'maintenance'},
}


@app.task(bind=True)
def debug_task(self):
    print(f'Request: {self.request!r}')
