from sqlalchemy import select
from src.core.db.tables.secretkey import SecretKey
from fastapi import Depends, HTTPException, status, Request
from typing import Generator
from sqlalchemy.orm import sessionmaker, Session
from src.core.db.engine import engine
from src.core.security import verify_key

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def extract_key_id(key: str) -> str:
    """
    Extract the key identifier from a secret key for database lookup.
    Uses the first 16 characters (prefix + 13 chars of random part).
    """
    return key[:16] if len(key) >= 16 else key


def find_account(session: Session, secret_key: str) -> SecretKey | None:
    """Look up the account owning a secret key, verifying the full key hash."""
    sk_object = session.execute(
        select(SecretKey).where(SecretKey.sk_id == extract_key_id(secret_key))
    ).scalar()

    if sk_object and verify_key(secret_key, sk_object.sk_hash):
        return sk_object
    return None


def get_current_user(
    request: Request,
    session: Session = Depends(get_db),
) -> SecretKey:
    """Dependency to authenticate user via secret key from HttpOnly cookie"""
    secret_key = request.cookies.get("secret_key")

    if not secret_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )

    sk_object = find_account(session, secret_key)
    if not sk_object:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid secret key"
        )

    return sk_object
