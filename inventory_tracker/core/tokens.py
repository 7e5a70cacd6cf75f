from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from inventory_tracker.config import Settings, get_settings
from inventory_tracker.core.errors import ConfigurationError, TokenExpired, TokenInvalid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenClaims:
    id: int
    username: str
    email: str
    expires_at: datetime


def require_signing_secret(settings: Settings) -> str:
    secret = (settings.JWT_SECRET or "").strip()
    if not secret:
        logger.error("JWT_SECRET is not set; refusing to handle tokens.")
        raise ConfigurationError()
    return secret


def _utcnow(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def issue_token(account, settings: Optional[Settings] = None, now: Optional[datetime] = None) -> str:
    """Sign a bearer token for ``account`` that expires JWT_EXPIRE_DAYS from now."""
    settings = settings or get_settings()
    secret = require_signing_secret(settings)
    issued_at = _utcnow(now)

    payload = {
        "user": {
            "id": account.id,
            "username": account.username,
            "email": account.email,
        },
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + timedelta(days=settings.JWT_EXPIRE_DAYS)).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str, settings: Optional[Settings] = None, now: Optional[datetime] = None) -> TokenClaims:
    settings = settings or get_settings()
    secret = require_signing_secret(settings)

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            # an explicit ``now`` replaces the wall clock for time-based claims
            options={
                "require": ["exp"],
                "verify_exp": now is None,
                "verify_iat": now is None,
            },
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpired() from exc
    except jwt.PyJWTError as exc:
        raise TokenInvalid() from exc

    expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
    if now is not None and _utcnow(now) >= expires_at:
        raise TokenExpired()

    user = payload.get("user")
    if not isinstance(user, dict):
        raise TokenInvalid()
    try:
        return TokenClaims(
            id=int(user["id"]),
            username=str(user["username"]),
            email=str(user["email"]),
            expires_at=expires_at,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise TokenInvalid() from exc
