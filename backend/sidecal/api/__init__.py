"""API routers."""

from sidecal.api import recurring_events

__all__ = [
    "recurring_events",
]
