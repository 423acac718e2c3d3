"""User API views."""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import mixins, permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.services import owner_tenancies
from apps.notifications.models import Notification
from apps.notifications.services import notify
from shared.domain.exceptions import ResourceNotFound
from shared.infrastructure.routing import UUID_LOOKUP_REGEX

from .permissions import IsPlatformAdmin, IsVerifiedOwner, PrincipalMixin
from .serializers import (
    OwnerProfileSerializer,
    TenantProfileSerializer,
    TenantRosterSerializer,
    UserSerializer,
    UserStatusSerializer,
)
from .stats import dashboard_stats

logger = logging.getLogger(__name__)

User = get_user_model()


class UserViewSet(
    PrincipalMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Account endpoints.

    - `me` returns the caller's own account; PATCH updates its profile
    - `tenants` is a verified owner's roster of current tenants
    - listing, retrieval, moderation (`status`) and `stats` are admin-only
    """

    serializer_class = UserSerializer
    queryset = User.objects.select_related("owner_profile", "tenant_profile").all()
    permission_classes = [IsPlatformAdmin]
    lookup_value_regex = UUID_LOOKUP_REGEX
    filterset_fields = ["role", "verification_status", "is_active"]

    @action(
        detail=False,
        methods=["get", "patch"],
        permission_classes=[permissions.IsAuthenticated],
        serializer_class=UserSerializer,
    )
    def me(self, request):
        """Return the current user's account, or update its profile on PATCH."""
        user = request.user
        if request.method == "PATCH":
            self._update_profile(user, request.data)
        return Response(UserSerializer(user).data)

    def _update_profile(self, user, data) -> None:
        if user.is_owner() and hasattr(user, "owner_profile"):
            serializer = OwnerProfileSerializer(user.owner_profile, data=data, partial=True)
        elif user.is_tenant() and hasattr(user, "tenant_profile"):
            serializer = TenantProfileSerializer(user.tenant_profile, data=data, partial=True)
        else:
            raise ResourceNotFound("Profile not found")
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info("User %s updated profile fields %s", user.pk, sorted(serializer.validated_data))

    @action(
        detail=False,
        methods=["get"],
        permission_classes=[IsVerifiedOwner],
        serializer_class=TenantRosterSerializer,
    )
    def tenants(self, request):
        """Tenants currently occupying rooms on the owner's properties."""
        tenancies = owner_tenancies(self.get_principal())
        page = self.paginate_queryset(tenancies)
        if page is not None:
            return self.get_paginated_response(TenantRosterSerializer(page, many=True).data)
        return Response(TenantRosterSerializer(tenancies, many=True).data)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        """Platform counters for the admin dashboard."""
        return Response(dashboard_stats())

    @action(detail=True, methods=["post"], url_path="status")
    def set_status(self, request, pk=None):
        """Activate/deactivate an account or settle an owner's verification."""
        user = self.get_object()
        serializer = UserStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        update_fields = ["updated_at"]
        if "is_active" in data:
            user.is_active = data["is_active"]
            update_fields.append("is_active")
        if "verification_status" in data:
            user.verification_status = data["verification_status"]
            update_fields.append("verification_status")
        with transaction.atomic():
            user.save(update_fields=update_fields)

        logger.info(
            "Admin %s updated account %s: %s",
            request.user.pk,
            user.pk,
            {field: getattr(user, field) for field in update_fields if field != "updated_at"},
        )
        self._notify_status_change(user, data)
        return Response(UserSerializer(user).data)

    def _notify_status_change(self, user, data) -> None:
        notes = data.get("notes") or ""
        suffix = f" Notes: {notes}" if notes else ""
        if "verification_status" in data:
            notify(
                user.pk,
                "Account Verification Update",
                f"Your account verification status has been updated to: "
                f"{user.verification_status}.{suffix}",
                Notification.Type.ACCOUNT,
            )
        if "is_active" in data:
            state = "activated" if user.is_active else "deactivated"
            notify(
                user.pk,
                f"Account {state.capitalize()}",
                f"Your account has been {state}.{suffix}",
                Notification.Type.SYSTEM,
            )
