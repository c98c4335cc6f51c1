"""
Role allow-lists for club officers.

Each protected operation names the set of roles allowed to invoke it. Two
roles exist: the administrator and the commodore.
"""

from typing import FrozenSet, Iterable, Optional


ROLE_ADMIN = "admin"
ROLE_COMMODORE = "commodore"

ALLOWED_ROLES: FrozenSet[str] = frozenset({ROLE_ADMIN, ROLE_COMMODORE})

# Derived allow-lists
MANAGE_CONTENT_ROLES: FrozenSet[str] = frozenset({ROLE_ADMIN, ROLE_COMMODORE})
VIEW_UNPUBLISHED_ROLES: FrozenSet[str] = frozenset({ROLE_ADMIN})


def is_role_allowed(role: Optional[str], allow_list: Iterable[str]) -> bool:
    """True when ``role`` is a member of ``allow_list``."""
    if not role:
        return False
    return role in set(allow_list)


def can_view_unpublished(role: Optional[str]) -> bool:
    """Unpublished stories are visible to the administrator only."""
    return is_role_allowed(role, VIEW_UNPUBLISHED_ROLES)


def validate_role(role: str) -> None:
    """
    Validate that a role is known.

    Raises:
        ValueError: If role is not allowed
    """
    if role not in ALLOWED_ROLES:
        raise ValueError(f"Invalid role '{role}'. Allowed roles: {sorted(ALLOWED_ROLES)}")
