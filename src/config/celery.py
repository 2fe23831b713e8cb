"""
Celery application for the product catalog.

The RPC transport is served by the Celery worker: each message pattern is
a task declared in ``modules/<module>/tasks.py``.  DJANGO_SETTINGS_MODULE
is set before the app is instantiated so Celery reads the Django settings
(``CELERY_`` prefix).
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("catalog")

# Reads Django settings with the CELERY_ prefix
app.config_from_object("django.conf:settings", namespace="CELERY")

# Discovers tasks.py in every installed app
app.autodiscover_tasks()
