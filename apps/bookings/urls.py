"""Booking routes.

``/``                       list (role scoped) and create
``/<id>/``                  retrieve
``/<id>/decision/``         owner approves or rejects
``/<id>/cancel/``           tenant cancels
"""

from __future__ import annotations

from rest_framework.routers import SimpleRouter  # type: ignore

from .views import BookingViewSet

router = SimpleRouter()
router.register(r"", BookingViewSet, basename="booking")

urlpatterns = router.urls
