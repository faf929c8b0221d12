"""
Structured events emitted by the recovery credential manager.

The manager only builds RecoveryEvent objects; turning them into log lines is
the job of an EventSink such as LoggingEventSink.
"""
import logging
from datetime import datetime
from enum import Enum
from typing import Optional, Protocol

from pydantic import BaseModel

from src.core.logger import get_logger
from src.core.recovery.display import render_recovery_panel


class RecoveryEventKind(str, Enum):
    ISSUED = "issued"
    EXPIRED = "expired"
    INVALIDATED = "invalidated"
    USED = "used"


class RecoveryEvent(BaseModel):
    kind: RecoveryEventKind
    key: Optional[str] = None
    expires_at: Optional[datetime] = None
    remaining_minutes: Optional[int] = None


class EventSink(Protocol):
    def emit(self, event: RecoveryEvent) -> None:
        ...


# Plain one-line messages; ISSUED is rendered as a panel instead
EVENT_MESSAGES = {
    RecoveryEventKind.EXPIRED: (logging.WARNING, "Recovery key has expired"),
    RecoveryEventKind.INVALIDATED: (logging.INFO, "Recovery key has been invalidated"),
    RecoveryEventKind.USED: (logging.INFO, "Recovery key has been used successfully"),
}


class LoggingEventSink:
    """
    Render recovery events to a standard library logger.

    An issued key is shown as a bordered panel at WARNING level, framed by
    blank INFO lines so it stands out in the server console.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_logger("recovery")

    def emit(self, event: RecoveryEvent) -> None:
        if event.kind is RecoveryEventKind.ISSUED:
            self.logger.info("")
            for line in render_recovery_panel(event.key, event.remaining_minutes):
                self.logger.warning(line)
            self.logger.info("")
            return

        level, message = EVENT_MESSAGES[event.kind]
        self.logger.log(level, message)


class RecordingEventSink:
    """Keep every emitted event in memory, oldest first."""

    def __init__(self):
        self.events: list[RecoveryEvent] = []

    def emit(self, event: RecoveryEvent) -> None:
        self.events.append(event)

    @property
    def kinds(self) -> list[RecoveryEventKind]:
        return [event.kind for event in self.events]
