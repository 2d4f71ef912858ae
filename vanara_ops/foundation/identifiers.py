"""ID generation for domain records."""

from __future__ import annotations

from uuid import uuid4


def new_id() -> str:
    """Generate a new random UUID v4 string for alerts and log entries."""
    return str(uuid4())
