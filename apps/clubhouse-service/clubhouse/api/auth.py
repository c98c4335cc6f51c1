"""
Officer credential lookup and authentication.

The club has two built-in officer accounts whose passwords come from the
environment (``ADMIN_PASSWORD``, ``COMMODORE_PASSWORD``). Credentials are
held behind a small store interface so deployments and tests can swap in
another source through ``app.dependency_overrides[get_credential_store]``.
"""
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Optional, Protocol

from clubhouse.utils import config
from clubhouse.utils.role_permissions import ROLE_ADMIN, ROLE_COMMODORE, validate_role
from clubhouse.utils.token_crypto import TokenUser, hash_password, verify_password

logger = logging.getLogger("clubhouse.auth")


@dataclass(frozen=True)
class OfficerCredential:
    user: TokenUser
    password_hash: str


class CredentialStore(Protocol):
    def lookup(self, username: str) -> Optional[OfficerCredential]:
        ...


class StaticCredentialStore:
    """In-memory, read-only credential store."""

    def __init__(self, credentials: Dict[str, OfficerCredential]):
        self._credentials = dict(credentials)

    def lookup(self, username: str) -> Optional[OfficerCredential]:
        return self._credentials.get((username or "").strip().lower())

    @classmethod
    def from_plaintext(cls, accounts) -> "StaticCredentialStore":
        """Build a store from ``(TokenUser, password)`` pairs, hashing each password."""
        credentials = {}
        for user, password in accounts:
            validate_role(user.role)
            credentials[user.username.lower()] = OfficerCredential(user=user, password_hash=hash_password(password))
        return cls(credentials)


def default_officers():
    return [
        (
            TokenUser(id="1", username="admin", name="Club Administrator", role=ROLE_ADMIN),
            config.officer_password("admin", "yacht123"),
        ),
        (
            TokenUser(id="2", username="commodore", name="Commodore", role=ROLE_COMMODORE),
            config.officer_password("commodore", "sailing456"),
        ),
    ]


@lru_cache(maxsize=1)
def _default_store() -> StaticCredentialStore:
    return StaticCredentialStore.from_plaintext(default_officers())


def get_credential_store() -> CredentialStore:
    """FastAPI dependency returning the process-wide credential store."""
    return _default_store()


def authenticate(store: CredentialStore, username: str, password: str) -> Optional[TokenUser]:
    credential = store.lookup(username)
    if credential is None or not verify_password(password, credential.password_hash):
        logger.warning("login_failed: username=%s", username)
        return None
    logger.info("login_succeeded: username=%s role=%s", credential.user.username, credential.user.role)
    return credential.user
