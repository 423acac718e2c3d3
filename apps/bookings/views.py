"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsBookingParticipant, IsOwner, IsTenant, PrincipalMixin
from shared.domain.exceptions import ResourceNotFound
from shared.infrastructure.routing import UUID_LOOKUP_REGEX

from . import services
from .filters import BookingFilterSet
from .models import Booking
from .serializers import BookingCreateSerializer, BookingDecisionSerializer, BookingSerializer


class BookingViewSet(
    PrincipalMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Bookings seen through the caller's role.

    - tenants see and cancel their own bookings and create new ones
    - owners see bookings on their properties and decide pending ones
    - admins see every booking
    """

    queryset = Booking.objects.select_related("room", "property", "tenant").all()
    serializer_class = BookingSerializer
    permission_classes = [IsBookingParticipant]
    filterset_class = BookingFilterSet
    lookup_value_regex = UUID_LOOKUP_REGEX

    def get_permissions(self):  # type: ignore
        if self.action in {"create", "cancel"}:
            return [IsTenant()]
        if self.action == "decision":
            return [IsOwner()]
        return super().get_permissions()

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "decision":
            return BookingDecisionSerializer
        return BookingSerializer

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if getattr(self, "swagger_fake_view", False):
            return qs.none()
        principal = self.get_principal()
        if principal.is_admin:
            return qs
        if principal.is_owner:
            return qs.filter(property__owner__user_id=principal.user_id)
        return qs.filter(tenant__user_id=principal.user_id)

    def get_object(self):  # type: ignore
        booking = self.get_queryset().filter(pk=self.kwargs["pk"]).first()
        if booking is None:
            raise ResourceNotFound("Booking not found or access denied")
        return booking

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        booking = services.create_booking(
            self.get_principal(),
            data["room_id"],
            data["move_in_date"],
            data.get("move_out_date"),
            data.get("tenant_notes", ""),
        )
        read_serializer = BookingSerializer(booking, context=self.get_serializer_context())
        return Response(read_serializer.data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def decision(self, request, pk=None):  # type: ignore
        serializer = BookingDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.decide_booking(
            self.get_principal(),
            pk,
            serializer.validated_data["status"],
            serializer.validated_data.get("notes", ""),
        )
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking = services.cancel_booking(self.get_principal(), pk)
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)
