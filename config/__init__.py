"""Project configuration: settings, URL root, Celery app and server entry points."""

# Loading the Celery app here registers shared tasks (booking expiry) with
# it before any task is sent.
from .celery import app as celery_app  # noqa: F401

__all__ = ("celery_app",)
