"""Router helpers shared by the API apps."""

from __future__ import annotations

# Detail routes only match canonical UUIDs, so malformed ids 404 at the
# URL resolver instead of reaching the ORM.
UUID_LOOKUP_REGEX = (
    "[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
