"""Notifications app package.

Stores in-app notifications produced by the booking lifecycle and account
moderation, and exposes them to their recipients.
"""
