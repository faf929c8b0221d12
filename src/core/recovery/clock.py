from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    """Time source used for issuance and expiry checks."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock returning timezone-aware UTC datetimes."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
