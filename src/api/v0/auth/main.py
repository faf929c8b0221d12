from datetime import datetime, timezone

from sqlalchemy.orm import Session
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from fastapi import APIRouter, Depends, HTTPException, status, Response

from src.api.dependencies import get_recovery_manager
from src.core.security import new_sk, hash_key
from src.core.recovery import RecoveryCredentialManager
from src.core.db.tables.secretkey import SecretKey
from src.core.db.session import get_db, get_current_user, extract_key_id, find_account
from src.core.logger import get_logger
from src.api.v0.auth.models import (
    RecoveryLoginRequest,
    RecoveryLoginResponse,
    RecoveryStatusResponse,
    VerifyLoginRequest,
    VerifyLoginResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/auth")


def set_secret_key_cookie(response: Response, secret_key: str) -> None:
    # HttpOnly keeps the key away from scripts; SameSite=Strict blocks CSRF
    response.set_cookie(
        key="secret_key",
        value=secret_key,
        httponly=True,
        secure=False,  # Set to True in production with HTTPS
        samesite="strict",
        max_age=365 * 24 * 60 * 60,  # 1 year in seconds
        path="/",
    )


@router.post("/recovery/login", response_model=RecoveryLoginResponse)
def recovery_login(
    response: Response,
    login_request: RecoveryLoginRequest,
    session: Session = Depends(get_db),
    manager: RecoveryCredentialManager = Depends(get_recovery_manager),
):
    """
    Reset an account's access with the emergency recovery key.

    Any username is accepted: the account is created if it does not exist,
    otherwise its secret key is replaced. The recovery key is consumed only
    after the new secret key has been stored, and concurrent logins with the
    same key are serialized so only one of them succeeds.
    """
    username = login_request.username

    with manager.consuming(login_request.key) as ok:
        if not ok:
            logger.warning(f"Recovery login rejected for username: {username}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )

        new_secret_key = new_sk()
        sk_id = extract_key_id(new_secret_key)
        sk_hash = hash_key(new_secret_key)

        account = session.execute(
            select(SecretKey).where(SecretKey.username == username)
        ).scalar()

        try:
            if account:
                account.sk_id = sk_id
                account.sk_hash = sk_hash
                account.rotated_at = datetime.now(timezone.utc)
            else:
                session.add(SecretKey(sk_id=sk_id, sk_hash=sk_hash, username=username))
            session.commit()
        except IntegrityError:
            session.rollback()
            logger.error(f"Database integrity error during recovery for: {username}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Could not reset access, try again",
            )

    logger.info(f"Access reset through recovery key for user: {username}")

    set_secret_key_cookie(response, new_secret_key)
    return RecoveryLoginResponse(username=username, sk=new_secret_key)


@router.get("/recovery/status", response_model=RecoveryStatusResponse)
def recovery_status(
    manager: RecoveryCredentialManager = Depends(get_recovery_manager),
):
    """Report whether recovery mode is on and a key is waiting to be used"""
    return RecoveryStatusResponse(
        enabled=manager.is_recovery_mode_enabled(),
        active=manager.is_active(),
    )


@router.post("/verify", response_model=VerifyLoginResponse)
def verify_login(
    verify_request: VerifyLoginRequest,
    session: Session = Depends(get_db),
):
    """Check that a secret key belongs to an account"""
    account = find_account(session, verify_request.sk)
    if not account:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    return VerifyLoginResponse(username=account.username)


@router.get("/me", response_model=VerifyLoginResponse)
def current_user(user: SecretKey = Depends(get_current_user)):
    """Return the account authenticated by the secret_key cookie"""
    return VerifyLoginResponse(username=user.username)
