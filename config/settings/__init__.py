"""Settings modules for RoomNest.

``base`` holds everything shared; ``dev``, ``prod`` and ``test`` each
import it and override what differs. Select one through
``DJANGO_SETTINGS_MODULE``.
"""
