"""PermissionService unit tests with mocked repos."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from eduhub.application.services.permission_service import (
    SEEDED_PERMISSIONS,
    PermissionService,
)
from eduhub.domain.exceptions import ResourceNotFoundException, ValidationException


@pytest.fixture
def repos():
    permissions = AsyncMock()
    permissions.get_by_codes = AsyncMock(
        side_effect=lambda codes: [
            SimpleNamespace(id=i, code=c)
            for i, c in enumerate(sorted(codes), start=1)
            if c in SEEDED_PERMISSIONS
        ]
    )
    permissions.grant = AsyncMock(return_value=2)
    permissions.revoke = AsyncMock(return_value=1)
    permissions.get_user_codes = AsyncMock(return_value=["CONTENT_VIEW"])
    users = AsyncMock()
    users.get_by_id = AsyncMock(return_value=SimpleNamespace(id=4, role="TEACHER"))
    return PermissionService(permissions, users), permissions, users


async def test_get_for_user(repos) -> None:
    service, _, _ = repos
    assert await service.get_for_user(4) == {
        "user": {"id": 4, "role": "TEACHER"},
        "permissions": ["CONTENT_VIEW"],
    }


async def test_unknown_user_is_not_found(repos) -> None:
    service, _, users = repos
    users.get_by_id.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await service.assign(4, ["CONTENT_VIEW"])


async def test_assign_grants_resolved_ids(repos) -> None:
    service, permissions, _ = repos
    assert await service.assign(4, ["CONTENT_VIEW", "CONTENT_EDIT"]) == 2
    permissions.grant.assert_awaited_once_with(4, [1, 2])


async def test_assign_duplicate_codes_count_once(repos) -> None:
    service, permissions, _ = repos
    await service.assign(4, ["CONTENT_VIEW", "CONTENT_VIEW"])
    permissions.grant.assert_awaited_once_with(4, [1])


async def test_empty_list_is_rejected(repos) -> None:
    service, _, _ = repos
    with pytest.raises(ValidationException) as exc_info:
        await service.assign(4, [])
    assert exc_info.value.message == "Permissions list must not be empty"


async def test_unknown_code_is_rejected(repos) -> None:
    service, permissions, _ = repos
    with pytest.raises(ValidationException) as exc_info:
        await service.assign(4, ["CONTENT_VIEW", "LAUNCH_ROCKETS"])
    assert exc_info.value.message == "Some permissions are invalid"
    permissions.grant.assert_not_awaited()


async def test_replace_revokes_everything_first(repos) -> None:
    service, permissions, _ = repos
    await service.replace(4, ["CONTENT_DELETE"])
    permissions.revoke.assert_awaited_once_with(4)
    permissions.grant.assert_awaited_once_with(4, [1])


async def test_remove_without_codes_revokes_all(repos) -> None:
    service, permissions, _ = repos
    assert await service.remove(4) == 1
    permissions.revoke.assert_awaited_once_with(4, None)
