"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "property",
        "room",
        "tenant",
        "status",
        "move_in_date",
        "move_out_date",
        "booking_date",
    )
    list_filter = ("status", "cancellation_source", "move_in_date")
    search_fields = ("property__name", "room__room_number", "tenant__name", "tenant__user__email")
    readonly_fields = (
        "status",
        "booking_date",
        "decided_at",
        "cancelled_at",
        "cancellation_source",
        "created_at",
        "updated_at",
    )
