import pytest

from clubhouse.utils.role_permissions import (
    ALLOWED_ROLES,
    MANAGE_CONTENT_ROLES,
    ROLE_ADMIN,
    ROLE_COMMODORE,
    can_view_unpublished,
    is_role_allowed,
    validate_role,
)


class TestRolePermissions:
    """Unit tests for the officer role allow-lists."""

    def test_known_roles(self):
        assert ALLOWED_ROLES == {ROLE_ADMIN, ROLE_COMMODORE}

    def test_content_managers(self):
        assert is_role_allowed("admin", MANAGE_CONTENT_ROLES)
        assert is_role_allowed("commodore", MANAGE_CONTENT_ROLES)
        assert not is_role_allowed("member", MANAGE_CONTENT_ROLES)
        assert not is_role_allowed(None, MANAGE_CONTENT_ROLES)

    def test_custom_allow_list(self):
        assert is_role_allowed("admin", {"admin"})
        assert not is_role_allowed("commodore", {"admin"})

    def test_can_view_unpublished(self):
        assert can_view_unpublished("admin") is True
        assert can_view_unpublished("commodore") is False
        assert can_view_unpublished(None) is False

    def test_validate_role(self):
        validate_role("admin")
        with pytest.raises(ValueError, match="Invalid role 'member'"):
            validate_role("member")
