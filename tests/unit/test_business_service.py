"""BusinessService with mocked repos: slug conflicts and creator attachment."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from eduhub.application.services.business_service import BusinessService
from eduhub.domain.enums import UserRole
from eduhub.domain.exceptions import AlreadyExistsException, ResourceNotFoundException
from eduhub.domain.value_objects import Principal

CREATOR = Principal(id=7, role=UserRole.USER)


@pytest.fixture
def mocks():
    businesses = AsyncMock()
    businesses.get_by_slug = AsyncMock(return_value=None)
    businesses.model = lambda **kw: SimpleNamespace(id=1, **kw)
    businesses.create = AsyncMock(side_effect=lambda obj: obj)
    businesses.get_by_id = AsyncMock(return_value=SimpleNamespace(id=1, slug="acme"))
    users = AsyncMock()
    users.get_by_id = AsyncMock(return_value=SimpleNamespace(id=7, business_id=None))
    return BusinessService(businesses, users), businesses, users


async def test_create_attaches_creator(mocks) -> None:
    service, _, users = mocks
    business = await service.create(CREATOR, {"institute_name": "Acme", "slug": "acme"})
    assert business.slug == "acme"
    assert users.update.await_args.kwargs == {"business_id": 1}


async def test_create_slug_conflict(mocks) -> None:
    service, businesses, users = mocks
    businesses.get_by_slug.return_value = SimpleNamespace(id=2)
    with pytest.raises(AlreadyExistsException) as exc_info:
        await service.create(CREATOR, {"institute_name": "Acme", "slug": "acme"})
    assert exc_info.value.message == "Business with slug 'acme' already exists"
    businesses.create.assert_not_awaited()
    users.update.assert_not_awaited()


async def test_update_to_taken_slug_conflicts(mocks) -> None:
    service, businesses, _ = mocks
    businesses.get_by_slug.return_value = SimpleNamespace(id=2)
    with pytest.raises(AlreadyExistsException) as exc_info:
        await service.update(1, {"slug": "taken"})
    assert exc_info.value.message == "Slug 'taken' is already taken"


async def test_update_keeping_own_slug_skips_lookup(mocks) -> None:
    service, businesses, _ = mocks
    await service.update(1, {"slug": "acme", "institute_name": "Acme Ltd"})
    businesses.get_by_slug.assert_not_awaited()
    businesses.update.assert_awaited_once()


async def test_get_by_unknown_slug(mocks) -> None:
    service, businesses, _ = mocks
    businesses.find_one.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await service.get_by_slug("nope")


async def test_delete_missing_business(mocks) -> None:
    service, businesses, _ = mocks
    businesses.get_by_id.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await service.delete(1)
