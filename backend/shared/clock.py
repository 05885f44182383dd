"""
Time source shared by services.

Services take a ``Clock`` at construction instead of calling
``datetime.now`` directly, so tests can pin or advance time.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
