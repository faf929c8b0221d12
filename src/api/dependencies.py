from fastapi import Request

from src.core.recovery import RecoveryCredentialManager


def get_recovery_manager(request: Request) -> RecoveryCredentialManager:
    """Dependency returning the recovery manager owned by the running app"""
    return request.app.state.recovery_manager
