"""Notification routes: list, retrieve, ``mark_read`` and ``mark_all_read``."""

from rest_framework.routers import SimpleRouter  # type: ignore

from .views import NotificationViewSet

router = SimpleRouter()
router.register(r'', NotificationViewSet, basename='notification')

urlpatterns = router.urls
