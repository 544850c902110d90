"""Wall-clock derived build ordinal.

The ordinal counts whole hours since a fixed epoch shared by every
consumer. It needs no shared state, so separate machines agree on the
value for the same hour.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

BUILD_EPOCH = datetime(2016, 1, 1, tzinfo=timezone.utc)
BUILD_INTERVAL = timedelta(hours=1)


def build_ordinal(now: Optional[datetime] = None) -> int:
    """Return the number of whole hours between BUILD_EPOCH and now (UTC)."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now - BUILD_EPOCH) // BUILD_INTERVAL
