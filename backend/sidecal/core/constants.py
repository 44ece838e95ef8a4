"""
Storage keys shared by the recurrence engine and its callers.
"""

# Ordered list of every recurring-event record
RECURRING_EVENTS_KEY = "recurringEvents"

# Per-date one-off events live under "<prefix><YYYY-MM-DD>"
LOCAL_EVENTS_PREFIX = "localEvents_"


def local_events_key(date_str: str) -> str:
    """Storage key holding the one-off events of a single day."""
    return f"{LOCAL_EVENTS_PREFIX}{date_str}"
