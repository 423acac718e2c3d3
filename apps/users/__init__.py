"""Users app package.

This module initializes the users app. It defines the custom user model
with tenant, owner and admin roles, the per-role profiles, registration
and login, and the role gate used by every other app. Use
``apps.users.models.User`` as the AUTH_USER_MODEL throughout the project.
"""
