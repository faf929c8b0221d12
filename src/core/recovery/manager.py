"""
Recovery credential manager.

Issues a single short-lived recovery key that lets a locked-out administrator
bypass normal authentication once. The manager holds one credential slot:
issuing a new key discards the previous one, and a key that has expired or
been used can never validate again.
"""
import os
import threading
from contextlib import contextmanager
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Iterator, Optional

from pydantic import BaseModel

from src.core.config import RecoveryConfig
from src.core.logger import get_logger
from src.core.recovery.clock import Clock, SystemClock
from src.core.recovery.display import remaining_minutes
from src.core.recovery.events import (
    EventSink,
    LoggingEventSink,
    RecoveryEvent,
    RecoveryEventKind,
)
from src.core.security import constant_time_compare, new_recovery_key

logger = get_logger(__name__)

RECOVERY_KEY_TTL = timedelta(minutes=15)


class CredentialState(str, Enum):
    EMPTY = "empty"
    ACTIVE = "active"
    CONSUMED = "consumed"
    DEAD = "dead"


class RecoveryCredential(BaseModel):
    key: Optional[str] = None
    expires_at: Optional[datetime] = None
    used: bool = False


class RecoveryCredentialManager:
    """
    Owns the recovery credential slot (key, expiry, used flag).

    Collaborators are injected so hosts and tests can control them:

    - config: answers whether recovery mode is enabled
    - random_bytes: cryptographically secure byte source, os.urandom by default
    - clock: time source, SystemClock by default
    - sink: receives RecoveryEvent objects, LoggingEventSink by default

    Validation does not consume the key. Callers authenticate with
    validate_key() and then call mark_as_used() once their own work succeeded.
    Concurrent callers should use consuming() instead, which holds the lock
    across both steps so a key can only be redeemed once.
    """

    def __init__(
        self,
        config: RecoveryConfig,
        random_bytes: Callable[[int], bytes] = os.urandom,
        clock: Optional[Clock] = None,
        sink: Optional[EventSink] = None,
    ):
        self.config = config
        self.random_bytes = random_bytes
        self.clock = clock or SystemClock()
        self.sink = sink or LoggingEventSink()

        self._lock = threading.RLock()
        self._key: Optional[str] = None
        self._expires_at: Optional[datetime] = None
        self._used = False

    @property
    def key(self) -> Optional[str]:
        with self._lock:
            return self._key

    @property
    def expires_at(self) -> Optional[datetime]:
        with self._lock:
            return self._expires_at

    @property
    def used(self) -> bool:
        with self._lock:
            return self._used

    def snapshot(self) -> RecoveryCredential:
        """Copy of the credential slot taken in a single locked read."""
        with self._lock:
            return RecoveryCredential(
                key=self._key, expires_at=self._expires_at, used=self._used
            )

    @property
    def state(self) -> CredentialState:
        with self._lock:
            if self._key is None:
                return CredentialState.DEAD if self._used else CredentialState.EMPTY
            if self._used:
                return CredentialState.CONSUMED
            return CredentialState.ACTIVE

    def is_active(self) -> bool:
        """True while a key exists, is unused and has not expired."""
        with self._lock:
            return (
                self._key is not None
                and not self._used
                and self.clock.now() <= self._expires_at
            )

    def is_recovery_mode_enabled(self) -> bool:
        return self.config.recovery_mode_enabled()

    def generate(self) -> Optional[str]:
        """
        Issue a new recovery key, replacing any previous one.

        Returns:
            The new key, or None when recovery mode is disabled
        """
        if not self.is_recovery_mode_enabled():
            return None

        with self._lock:
            now = self.clock.now()
            self._key = new_recovery_key(self.random_bytes)
            self._expires_at = now + RECOVERY_KEY_TTL
            self._used = False

            self._emit(
                RecoveryEvent(
                    kind=RecoveryEventKind.ISSUED,
                    key=self._key,
                    expires_at=self._expires_at,
                    remaining_minutes=remaining_minutes(self._expires_at, now),
                )
            )
            return self._key

    def validate_key(self, candidate: str) -> bool:
        """
        Check a candidate against the current recovery key.

        An expired key is invalidated as a side effect. A successful check
        leaves the key usable until mark_as_used() is called.
        """
        with self._lock:
            if not self._key or self._used:
                return False

            if self.clock.now() > self._expires_at:
                self._emit(RecoveryEvent(kind=RecoveryEventKind.EXPIRED))
                self.invalidate()
                return False

            if not isinstance(candidate, str):
                return False
            return constant_time_compare(candidate, self._key)

    @contextmanager
    def consuming(self, candidate: str) -> Iterator[bool]:
        """
        Validate a candidate and consume the key when the block completes.

        The lock is held from validation until consumption, so concurrent
        redemptions of one key are serialized and only the first succeeds.
        If the block raises, the key is left unconsumed.

        Usage:
            with manager.consuming(candidate) as ok:
                if not ok:
                    ...  # deny
                ...      # reset access
        """
        with self._lock:
            ok = self.validate_key(candidate)
            yield ok
            if ok:
                self.mark_as_used()

    def invalidate(self) -> None:
        """Clear the current key for good. Does nothing if there is none."""
        with self._lock:
            if not self._key:
                return

            self._key = None
            self._expires_at = None
            self._used = True
            self._emit(RecoveryEvent(kind=RecoveryEventKind.INVALIDATED))

    def mark_as_used(self) -> None:
        """Consume the current key. The key itself is kept for inspection."""
        with self._lock:
            self._used = True
            self._emit(RecoveryEvent(kind=RecoveryEventKind.USED))

    def _emit(self, event: RecoveryEvent) -> None:
        try:
            self.sink.emit(event)
        except Exception:
            logger.exception(f"Recovery event sink failed on {event.kind.value} event")
