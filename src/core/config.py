"""
Runtime configuration for the recovery service.

Values are read from the process environment. The recovery-mode switch sits
behind the RecoveryConfig protocol so the credential manager can be given a
different provider in tests.
"""
import os
from typing import Protocol


def env_flag(name: str, default: str = "false") -> bool:
    """Read a boolean environment variable ("true" in any case enables it)."""
    return os.getenv(name, default).strip().lower() == "true"


DEBUG = env_flag("RECOVERY_DEBUG")
LOG_TO_FILE = env_flag("RECOVERY_LOG_TO_FILE", "true")
DATABASE_URL = os.getenv("RECOVERY_DB_URL") or "sqlite:///.data/recovery.db"


class RecoveryConfig(Protocol):
    """Source of the operator-controlled recovery-mode switch."""

    def recovery_mode_enabled(self) -> bool:
        ...


class EnvRecoveryConfig:
    """
    Recovery switch backed by the RECOVERY_MODE environment variable.

    The variable is polled on every call, so toggling it takes effect at the
    next key generation without restarting the process.
    """

    def __init__(self, variable: str = "RECOVERY_MODE"):
        self.variable = variable

    def recovery_mode_enabled(self) -> bool:
        return env_flag(self.variable)


class StaticRecoveryConfig:
    """Recovery switch with a fixed value that can be flipped in place."""

    def __init__(self, enabled: bool = False):
        self.enabled = enabled

    def recovery_mode_enabled(self) -> bool:
        return self.enabled
