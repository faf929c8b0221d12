"""
Console panel shown when a recovery key is issued.
"""
from datetime import datetime

PANEL_WIDTH = 40


def remaining_minutes(expires_at: datetime, now: datetime) -> int:
    """Whole minutes left until expiry, rounded down."""
    return int((expires_at - now).total_seconds() // 60)


def _row(text: str = "") -> str:
    return f"║{text.ljust(PANEL_WIDTH)}║"


def render_recovery_panel(key: str, minutes_left: int) -> list[str]:
    """
    Build the bordered text panel announcing an active recovery key.

    Args:
        key: The recovery key to display
        minutes_left: Minutes until the key expires

    Returns:
        The panel as a list of lines, top border first
    """
    border = "═" * PANEL_WIDTH
    return [
        f"╔{border}╗",
        _row("   RECOVERY MODE ACTIVE"),
        _row(),
        _row(f"   Recovery Key: {key}"),
        _row(f"   Expires: {minutes_left} minutes"),
        _row(),
        _row("   Login with any username and this"),
        _row("   key as password to reset access"),
        f"╚{border}╝",
    ]
