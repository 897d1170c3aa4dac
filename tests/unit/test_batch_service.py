"""BatchService unit tests with mocked repos: membership rules and visibility scoping."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from eduhub.application.dtos.access import OwnerRef
from eduhub.application.services.access_resolver import AccessResolver
from eduhub.application.services.batch_service import BatchService
from eduhub.domain.enums import EntityKind, UserRole
from eduhub.domain.exceptions import (
    AlreadyExistsException,
    ForbiddenException,
    ResourceNotFoundException,
    ValidationException,
)
from eduhub.domain.value_objects import Principal, QueryOptions

ADMIN = Principal(id=1, role=UserRole.ADMIN, business_id=1)


def _batch(business_id: int | None = 1, with_course: bool = True) -> SimpleNamespace:
    exam = SimpleNamespace(business_id=business_id) if business_id is not None else None
    course = SimpleNamespace(exam=exam) if with_course else None
    return SimpleNamespace(id=30, code_name="B-30", course=course)


@pytest.fixture
def mocks():
    batches = AsyncMock()
    batches.get_with_course = AsyncMock(return_value=_batch())
    batches.with_active_member = MagicMock(return_value="member-clause")
    batches.in_business = MagicMock(return_value="business-clause")
    batches.find_many = AsyncMock(return_value=[])
    members = AsyncMock()
    members.get_membership = AsyncMock(return_value=None)
    members.model = lambda **kw: SimpleNamespace(**kw)
    members.create = AsyncMock(side_effect=lambda obj: obj)
    users = AsyncMock()
    users.get_by_id = AsyncMock(
        return_value=SimpleNamespace(id=5, business_id=1, role=UserRole.STUDENT.value)
    )
    access = AsyncMock()
    service = BatchService(batches, members, users, access)
    return service, batches, members, users, access


async def test_add_user_creates_active_membership(mocks) -> None:
    service, _, members, _, access = mocks
    membership = await service.add_user(ADMIN, 5, 30)
    assert (membership.user_id, membership.batch_id, membership.is_active) == (5, 30, True)
    access.authorize_business.assert_awaited_once_with(1, ADMIN)
    members.create.assert_awaited_once()


async def test_add_user_unknown_batch(mocks) -> None:
    service, batches, _, _, _ = mocks
    batches.get_with_course.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await service.add_user(ADMIN, 5, 30)


@pytest.mark.parametrize("batch", [_batch(with_course=False), _batch(business_id=None)])
async def test_add_user_batch_without_business(mocks, batch) -> None:
    service, batches, _, _, access = mocks
    batches.get_with_course.return_value = batch
    with pytest.raises(ValidationException) as exc_info:
        await service.add_user(ADMIN, 5, 30)
    assert exc_info.value.message == "Batch is not associated with a valid business"
    access.authorize_business.assert_not_awaited()


async def test_add_user_access_denied_before_user_lookup(mocks) -> None:
    service, _, _, users, access = mocks
    access.authorize_business.side_effect = ForbiddenException("nope")
    with pytest.raises(ForbiddenException):
        await service.add_user(ADMIN, 5, 30)
    users.get_by_id.assert_not_awaited()


async def test_add_user_unknown_user(mocks) -> None:
    service, _, _, users, _ = mocks
    users.get_by_id.return_value = None
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await service.add_user(ADMIN, 5, 30)
    assert exc_info.value.details["resource_type"] == "User"


async def test_add_user_from_other_business(mocks) -> None:
    service, _, _, users, _ = mocks
    users.get_by_id.return_value = SimpleNamespace(id=5, business_id=2, role="STUDENT")
    with pytest.raises(ValidationException) as exc_info:
        await service.add_user(ADMIN, 5, 30)
    assert exc_info.value.message == "User is not part of this business"


@pytest.mark.parametrize("role", ["ADMIN", "USER", "SUPERADMIN"])
async def test_add_user_only_teachers_and_students(mocks, role: str) -> None:
    service, _, _, users, _ = mocks
    users.get_by_id.return_value = SimpleNamespace(id=5, business_id=1, role=role)
    with pytest.raises(ValidationException) as exc_info:
        await service.add_user(ADMIN, 5, 30)
    assert exc_info.value.message == "Only Teachers and Students can be added to a batch"


async def test_add_user_twice_conflicts(mocks) -> None:
    service, _, members, _, _ = mocks
    members.get_membership.return_value = SimpleNamespace(user_id=5, batch_id=30)
    with pytest.raises(AlreadyExistsException):
        await service.add_user(ADMIN, 5, 30)
    members.create.assert_not_awaited()


async def test_remove_user_not_member(mocks) -> None:
    service, _, _, _, access = mocks
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await service.remove_user(ADMIN, 5, 30)
    assert exc_info.value.message == "User is not in this batch"
    access.authorize.assert_awaited_once_with(EntityKind.BATCH, 30, ADMIN)


async def test_remove_user_deletes_membership(mocks) -> None:
    service, _, members, _, _ = mocks
    membership = SimpleNamespace(user_id=5, batch_id=30)
    members.get_membership.return_value = membership
    await service.remove_user(ADMIN, 5, 30)
    members.delete.assert_awaited_once_with(membership)


async def test_remove_user_from_other_business_batch_is_forbidden(mocks) -> None:
    _, batches, members, users, _ = mocks
    refs = {
        (EntityKind.BATCH, 31): OwnerRef(id=31, parent_id=21),
        (EntityKind.COURSE, 21): OwnerRef(id=21, parent_id=11),
        (EntityKind.EXAM, 11): OwnerRef(id=11, parent_id=2),
        (EntityKind.BUSINESS, 2): OwnerRef(id=2, parent_id=None),
    }
    lookup = AsyncMock()
    lookup.get_ref.side_effect = lambda kind, entity_id: refs.get((kind, entity_id))
    members.get_membership.return_value = SimpleNamespace(user_id=5, batch_id=31)
    service = BatchService(batches, members, users, AccessResolver(lookup))

    with pytest.raises(ForbiddenException) as exc_info:
        await service.remove_user(ADMIN, 5, 31)
    assert exc_info.value.details == {"reason": "tenant_mismatch"}
    members.get_membership.assert_not_awaited()
    members.delete.assert_not_awaited()


async def test_list_visible_superadmin_sees_all_active(mocks) -> None:
    service, batches, _, _, _ = mocks
    await service.list_visible(Principal(id=1, role=UserRole.SUPERADMIN), QueryOptions())
    opts = batches.find_many.await_args.args[0]
    assert opts.where == {"is_active": True}


async def test_list_visible_student_scoped_to_business_and_membership(mocks) -> None:
    service, batches, _, _, _ = mocks
    student = Principal(id=5, role=UserRole.STUDENT, business_id=1)
    await service.list_visible(student, QueryOptions(where={"is_active": False}))
    opts = batches.find_many.await_args.args[0]
    assert opts.where == {
        "is_active": True,
        "business": "business-clause",
        "member": "member-clause",
    }
    batches.in_business.assert_called_once_with(1)
    batches.with_active_member.assert_called_once_with(5)


async def test_list_visible_admin_not_membership_scoped(mocks) -> None:
    service, batches, _, _, _ = mocks
    await service.list_visible(ADMIN, QueryOptions())
    opts = batches.find_many.await_args.args[0]
    assert "member" not in opts.where


async def test_list_visible_without_business_is_forbidden(mocks) -> None:
    service, _, _, _, _ = mocks
    with pytest.raises(ForbiddenException):
        await service.list_visible(
            Principal(id=5, role=UserRole.TEACHER, business_id=None), QueryOptions()
        )
