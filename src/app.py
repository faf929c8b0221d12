"""
Recovery service
FastAPI authentication service with emergency recovery keys
"""
import os
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI

from src.api.router import router as api_router
from src.core.config import DEBUG, LOG_TO_FILE, EnvRecoveryConfig
from src.core.logger import configure_app_logging, get_logger
from src.core.middleware import SecurityHeadersMiddleware, RequestLoggingMiddleware
from src.core.recovery import RecoveryCredentialManager, SystemClock, LoggingEventSink

configure_app_logging(log_to_file=LOG_TO_FILE)

logger = get_logger(__name__)


def build_recovery_manager() -> RecoveryCredentialManager:
    """Create the process-wide recovery manager from the environment"""
    return RecoveryCredentialManager(
        config=EnvRecoveryConfig(),
        random_bytes=os.urandom,
        clock=SystemClock(),
        sink=LoggingEventSink(),
    )


def create_app(
    manager_factory: Callable[[], RecoveryCredentialManager] = build_recovery_manager,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        manager_factory: Called once at startup to create the recovery manager

    Returns:
        The configured application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        manager = manager_factory()
        app.state.recovery_manager = manager

        if manager.generate() is None:
            logger.info("Recovery mode disabled, no recovery key issued")
        yield
        manager.invalidate()

    application = FastAPI(title="Recovery Service", debug=DEBUG, lifespan=lifespan)

    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(RequestLoggingMiddleware)

    application.include_router(api_router)
    return application


app = create_app()

logger.info("Recovery service initialized")
