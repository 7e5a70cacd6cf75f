from typing import Optional

from fastapi import Depends, Header, Request

from inventory_tracker.config import Settings, get_settings
from inventory_tracker.core.errors import TokenMissing
from inventory_tracker.core.security import extract_token
from inventory_tracker.core.tokens import TokenClaims, verify_token
from inventory_tracker.database.session import get_db


def get_current_user(
    request: Request,
    auth_token: Optional[str] = Header(None, alias="x-auth-token"),
    settings: Settings = Depends(get_settings),
) -> TokenClaims:
    """Reject the request unless it carries a valid, unexpired token.

    The decoded claims are kept on ``request.state.user`` and returned to the
    handler, which scopes every inventory operation to ``claims.id``.
    """
    token = extract_token(auth_token)
    if not token:
        raise TokenMissing()

    claims = verify_token(token, settings=settings)
    request.state.user = claims
    return claims


__all__ = ["get_current_user", "get_db"]
