"""ASGI entry point for the RoomNest API.

Serves the same HTTP API as ``wsgi.py`` for ASGI servers such as uvicorn.
Deployments set ``DJANGO_SETTINGS_MODULE`` explicitly.
"""

import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.prod')

application = get_asgi_application()
