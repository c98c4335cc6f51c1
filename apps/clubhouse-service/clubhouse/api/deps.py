"""
API dependency helpers.

Resolves the caller from the ``Authorization: Bearer <token>`` header and
enforces per-operation role allow-lists.
"""
from typing import Iterable, Optional

from fastapi import Depends, Header, HTTPException, status

from clubhouse.utils.role_permissions import MANAGE_CONTENT_ROLES, is_role_allowed
from clubhouse.utils.token_crypto import TokenUser, verify_token


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user(authorization: Optional[str] = Header(default=None)) -> TokenUser:
    token = _bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Access token required")
    user = verify_token(token)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")
    return user


def get_optional_user(authorization: Optional[str] = Header(default=None)) -> Optional[TokenUser]:
    """Like ``get_current_user`` but anonymous callers (or bad tokens) resolve to None."""
    return verify_token(_bearer_token(authorization))


def require_roles(allow_list: Iterable[str] = MANAGE_CONTENT_ROLES):
    allowed = frozenset(allow_list)

    def _dependency(user: TokenUser = Depends(get_current_user)) -> TokenUser:
        if not is_role_allowed(user.role, allowed):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return user

    return _dependency


require_content_manager = require_roles(MANAGE_CONTENT_ROLES)
