from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from src.core.db.tables.base import Base
from datetime import datetime, timezone


class SecretKey(Base):
    """
    Stores the hashed secret key of each account.

    - sk_id: First 16 chars of the key, used as a lookup identifier
    - sk_hash: Bcrypt hash of the full secret key
    - username: Account name, one secret key per account
    - created_at: When the account was created
    - rotated_at: Last time the key was reset through recovery
    """
    __tablename__ = "secret_key"

    sk_id: Mapped[str] = mapped_column(String(16), primary_key=True)
    sk_hash: Mapped[str] = mapped_column(String(256))
    username: Mapped[str] = mapped_column(String(256), unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc)
    )
    rotated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
