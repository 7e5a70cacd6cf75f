from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import Optional

_ALGORITHM = "pbkdf2_sha256"
_SALT_BYTES = 16
_DEFAULT_ROUNDS = 200_000


def _pbkdf2(password: str, salt: str, rounds: int) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        rounds,
    )
    return digest.hex()


def hash_password(password: str, rounds: int = _DEFAULT_ROUNDS) -> str:
    """Hash ``password`` with a fresh random salt.

    The result is self-describing (``pbkdf2_sha256$rounds$salt$hex``) so that
    verification does not depend on the current rounds setting.
    """
    salt = secrets.token_hex(_SALT_BYTES)
    return "$".join((_ALGORITHM, str(rounds), salt, _pbkdf2(password, salt, rounds)))


def check_password(password: str, encoded: str) -> bool:
    try:
        algorithm, rounds, salt, expected = encoded.split("$", 3)
        rounds_value = int(rounds)
    except (AttributeError, ValueError):
        return False
    if algorithm != _ALGORITHM:
        return False
    computed = _pbkdf2(password, salt, rounds_value)
    return hmac.compare_digest(computed, expected)


def extract_token(header_value: Optional[str]) -> Optional[str]:
    if not header_value:
        return None
    parts = header_value.split()
    if len(parts) == 1:
        return parts[0]
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None
