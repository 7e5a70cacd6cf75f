import logging
from functools import lru_cache
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_tracker.config import get_settings
from inventory_tracker.core.errors import (
    DuplicateEmail,
    DuplicateUsername,
    InvalidCredentials,
    StorageError,
)
from inventory_tracker.core.security import check_password, hash_password
from inventory_tracker.models.account import Account

logger = logging.getLogger(__name__)


@lru_cache
def _dummy_hash(rounds: int) -> str:
    # checked when the email is unknown so both login failures do the same work
    return hash_password("not-a-real-password", rounds=rounds)


def prime_login_guard(rounds: Optional[int] = None) -> None:
    """Build the unknown-email hash ahead of the first failed login."""
    _dummy_hash(rounds or get_settings().PASSWORD_PBKDF2_ROUNDS)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_username(username: str) -> str:
    return username.strip()


def find_by_email(db: Session, email: str) -> Optional[Account]:
    return (
        db.execute(select(Account).where(Account.email == normalize_email(email)))
        .scalars()
        .first()
    )


def find_by_username(db: Session, username: str) -> Optional[Account]:
    return (
        db.execute(select(Account).where(Account.username == normalize_username(username)))
        .scalars()
        .first()
    )


def find_by_id(db: Session, account_id: int) -> Optional[Account]:
    return db.get(Account, account_id)


def is_email_available(db: Session, email: str) -> bool:
    return find_by_email(db, email) is None


def is_username_available(db: Session, username: str) -> bool:
    return find_by_username(db, username) is None


def verify_password(account: Account, candidate: str) -> bool:
    return check_password(candidate, account.password_hash)


def register(db: Session, username: str, email: str, password: str, *, rounds: Optional[int] = None) -> Account:
    """Create an account.

    Uniqueness of email and username is left to the unique indexes; a
    collision surfaces as an IntegrityError on flush and is reported as
    DuplicateEmail (checked first) or DuplicateUsername.
    """
    rounds = rounds or get_settings().PASSWORD_PBKDF2_ROUNDS
    account = Account(
        username=normalize_username(username),
        email=normalize_email(email),
        password_hash=hash_password(password, rounds=rounds),
    )

    try:
        db.add(account)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise _duplicate_error(db, account, exc) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to persist account %s", account.username)
        raise StorageError("Server error during registration") from exc

    db.refresh(account)
    logger.info("Registered account id=%s username=%s", account.id, account.username)
    return account


def _duplicate_error(db: Session, account: Account, exc: IntegrityError):
    # The insert was rejected, so the conflicting row is already committed.
    if find_by_email(db, account.email) is not None:
        logger.info("Registration rejected: email already exists")
        return DuplicateEmail()
    if find_by_username(db, account.username) is not None:
        logger.info("Registration rejected: username %s already taken", account.username)
        return DuplicateUsername()
    message = str(exc.orig).lower()
    if "email" in message:
        return DuplicateEmail()
    if "username" in message:
        return DuplicateUsername()
    return StorageError("Server error during registration")


def authenticate(db: Session, email: str, password: str, *, rounds: Optional[int] = None) -> Account:
    account = find_by_email(db, email)
    if account is None:
        check_password(password, _dummy_hash(rounds or get_settings().PASSWORD_PBKDF2_ROUNDS))
        logger.info("Login failed: unknown email")
        raise InvalidCredentials()

    if not verify_password(account, password):
        logger.info("Login failed: wrong password for account id=%s", account.id)
        raise InvalidCredentials()

    logger.info("Login succeeded for account id=%s", account.id)
    return account
