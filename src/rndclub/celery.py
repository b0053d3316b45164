"""Celery application for rndclub.

Start a worker and the beat scheduler with::

    celery -A rndclub worker -l INFO
    celery -A rndclub beat -l INFO
"""

import os
import typing as t

import structlog
from celery import Celery
from celery.signals import task_postrun, task_prerun

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "rndclub.settings")

app = Celery("rndclub")
# CELERY_* keys in the Django settings configure the app.
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


@task_prerun.connect
def bind_task_log_context(task_id: str, task: t.Any, *args: t.Any, **kwargs: t.Any) -> None:
    """Start every task with a fresh structlog context carrying the task identity."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        task_id=task_id,
        task_name=task.name,
        retries=getattr(task.request, "retries", 0) or 0,
    )


@task_postrun.connect
def clear_task_log_context(*args: t.Any, **kwargs: t.Any) -> None:
    structlog.contextvars.clear_contextvars()
