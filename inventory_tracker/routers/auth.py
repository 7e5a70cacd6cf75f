from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from inventory_tracker.config import Settings, get_settings
from inventory_tracker.core.errors import NotFound
from inventory_tracker.core.tokens import TokenClaims, issue_token, require_signing_secret
from inventory_tracker.dependencies import get_current_user, get_db
from inventory_tracker.schemas.account import (
    AccountRead,
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    VerifyResponse,
)
from inventory_tracker.services import account_service

router = APIRouter(tags=["Auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    # fail before anything is persisted if tokens cannot be signed
    require_signing_secret(settings)
    account = account_service.register(
        db,
        payload.username,
        payload.email,
        payload.password,
        rounds=settings.PASSWORD_PBKDF2_ROUNDS,
    )
    token = issue_token(account, settings=settings)
    return AuthResponse(
        token=token,
        user=AccountRead.model_validate(account),
        message="Registration successful!",
    )


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    require_signing_secret(settings)
    account = account_service.authenticate(
        db,
        payload.email,
        payload.password,
        rounds=settings.PASSWORD_PBKDF2_ROUNDS,
    )
    token = issue_token(account, settings=settings)
    return AuthResponse(
        token=token,
        user=AccountRead.model_validate(account),
        message="Login successful!",
    )


@router.get("/verify", response_model=VerifyResponse)
def verify(
    claims: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    account = account_service.find_by_id(db, claims.id)
    if account is None:
        raise NotFound("User not found")
    return VerifyResponse(user=AccountRead.model_validate(account))


@router.get("/check-email/{email}")
def check_email(email: str, db: Session = Depends(get_db)):
    return {
        "success": True,
        "available": account_service.is_email_available(db, email),
        "email": email,
    }


@router.get("/check-username/{username}")
def check_username(username: str, db: Session = Depends(get_db)):
    return {
        "success": True,
        "available": account_service.is_username_available(db, username),
        "username": username,
    }


__all__ = ["router"]
