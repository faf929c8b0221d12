from src.core.recovery.clock import Clock, SystemClock
from src.core.recovery.events import (
    EventSink,
    LoggingEventSink,
    RecordingEventSink,
    RecoveryEvent,
    RecoveryEventKind,
)
from src.core.recovery.manager import (
    RECOVERY_KEY_TTL,
    CredentialState,
    RecoveryCredential,
    RecoveryCredentialManager,
)

__all__ = [
    "Clock",
    "SystemClock",
    "EventSink",
    "LoggingEventSink",
    "RecordingEventSink",
    "RecoveryEvent",
    "RecoveryEventKind",
    "RECOVERY_KEY_TTL",
    "CredentialState",
    "RecoveryCredential",
    "RecoveryCredentialManager",
]
