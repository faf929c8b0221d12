"""
Test configuration and fixtures for the recovery service tests.
"""
import os

# Keep the test run away from the on-disk database and log file
os.environ.setdefault("RECOVERY_DB_URL", "sqlite://")
os.environ.setdefault("RECOVERY_LOG_TO_FILE", "false")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.core.config import StaticRecoveryConfig
from src.core.db.tables.base import Base
from src.core.db.tables.secretkey import SecretKey
from src.core.recovery import RecordingEventSink, RecoveryCredentialManager
from src.core.security import hash_key, new_sk


class FakeClock:
    """Clock frozen at a fixed instant until advanced by the test."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


class CountingRandom:
    """Deterministic byte source producing a different sequence per call."""

    def __init__(self):
        self.calls = 0
        self.requested: list[int] = []

    def __call__(self, n: int) -> bytes:
        self.requested.append(n)
        start = self.calls * 17
        self.calls += 1
        return bytes((start + i * 0x55) % 256 for i in range(n))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def recovery_config():
    return StaticRecoveryConfig(enabled=True)


@pytest.fixture
def sink():
    return RecordingEventSink()


@pytest.fixture
def random_source():
    return CountingRandom()


@pytest.fixture
def manager(recovery_config, random_source, clock, sink):
    """Recovery manager with recovery mode on and every collaborator faked."""
    return RecoveryCredentialManager(
        config=recovery_config,
        random_bytes=random_source,
        clock=clock,
        sink=sink,
    )


@pytest.fixture(scope="function")
def db_session():
    """Create an isolated test database session for each test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    Session = sessionmaker(bind=engine)
    session = Session()

    yield session

    session.close()
    Base.metadata.drop_all(engine)


@pytest.fixture
def client_factory():
    """Factory to create test clients bound to a db session and a recovery manager."""

    def create_client(session, recovery_manager, user_sk=None):
        from src.app import app
        from src.api.dependencies import get_recovery_manager
        from src.core.db.session import get_db

        def override_get_db():
            yield session

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_recovery_manager] = lambda: recovery_manager

        client = TestClient(app)
        if user_sk:
            client.cookies.set("secret_key", user_sk)
        return client

    yield create_client

    from src.app import app

    app.dependency_overrides.clear()


@pytest.fixture
def test_user_data(db_session):
    """Create an existing account and return its credentials."""
    sk = new_sk()
    db_session.add(SecretKey(sk_id=sk[:16], sk_hash=hash_key(sk), username="admin"))
    db_session.commit()

    return {"username": "admin", "sk": sk}
