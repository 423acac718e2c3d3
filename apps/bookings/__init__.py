"""Bookings app package.

This app encapsulates the booking lifecycle: requests, owner decisions,
cancellations and the expiry of unanswered requests. Room status changes
happen in the same database transaction as the booking transition and are
guarded by conditional updates so a room can never be booked twice.
"""
