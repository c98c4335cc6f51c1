"""
Password hashing and signed bearer tokens for club officers.

Responsibilities:
- Hash passwords using Argon2id and verify them without raising
- Issue HS256 JWTs carrying the officer profile with a fixed 24-hour validity
- Verify tokens, returning the embedded profile or None on any failure
"""
from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass
from typing import Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import Type

from clubhouse.utils import config

logger = logging.getLogger(__name__)

_argon2 = PasswordHasher(time_cost=2, memory_cost=102400, parallelism=8, hash_len=32, type=Type.ID)

TOKEN_TTL_SECONDS = config.TOKEN_TTL_HOURS * 60 * 60

_PROFILE_CLAIMS = ("id", "username", "name", "role")


@dataclass(frozen=True)
class TokenUser:
    id: str
    username: str
    name: str
    role: str

    def to_dict(self) -> dict:
        return asdict(self)


def hash_password(password: str) -> str:
    if not password:
        raise ValueError("Password is empty.")
    return _argon2.hash(password)


def verify_password(password: str, encoded_hash: str) -> bool:
    if not password or not encoded_hash:
        return False
    try:
        return _argon2.verify(encoded_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def issue_token(user: TokenUser, *, now: Optional[int] = None) -> str:
    issued_at = int(time.time()) if now is None else now
    payload = {
        **user.to_dict(),
        "iat": issued_at,
        "exp": issued_at + TOKEN_TTL_SECONDS,
    }
    return jwt.encode(payload, config.jwt_secret(), algorithm=config.jwt_algorithm())


def verify_token(token: Optional[str]) -> Optional[TokenUser]:
    """Return the profile embedded in ``token``; None when malformed, expired or badly signed."""
    raw = (token or "").strip()
    if not raw:
        return None
    try:
        payload = jwt.decode(raw, config.jwt_secret(), algorithms=[config.jwt_algorithm()])
    except jwt.InvalidTokenError as exc:
        logger.warning("token_rejected: %s", exc)
        return None
    if not all(isinstance(payload.get(claim), str) and payload.get(claim) for claim in _PROFILE_CLAIMS):
        logger.warning("token_rejected: missing profile claims")
        return None
    return TokenUser(
        id=payload["id"],
        username=payload["username"],
        name=payload["name"],
        role=payload["role"],
    )
