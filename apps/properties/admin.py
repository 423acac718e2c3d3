"""Admin registrations for properties domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Property, Room


class RoomInline(admin.TabularInline):
    model = Room
    extra = 0
    fields = ("room_number", "room_type", "rent_amount", "deposit_amount", "status")
    readonly_fields = ("status",)


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "state", "pincode", "owner", "created_at")
    list_filter = ("city", "state")
    search_fields = ("name", "city", "state", "address", "owner__business_name")
    inlines = (RoomInline,)
    readonly_fields = ("created_at", "updated_at")


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("room_number", "property", "room_type", "rent_amount", "status", "last_updated")
    list_filter = ("status", "room_type")
    search_fields = ("room_number", "property__name", "property__city")
    readonly_fields = ("last_updated", "created_at", "updated_at")
