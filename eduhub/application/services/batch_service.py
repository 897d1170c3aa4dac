"""Batch application service: batches of a course and their memberships."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from eduhub.application.services.access_resolver import AccessResolver
from eduhub.domain.enums import EntityKind, UserRole
from eduhub.domain.exceptions import (
    AlreadyExistsException,
    ForbiddenException,
    ResourceNotFoundException,
    ValidationException,
)
from eduhub.domain.value_objects import Principal, QueryOptions

logger = logging.getLogger(__name__)

_MEMBER_ROLES = (UserRole.TEACHER.value, UserRole.STUDENT.value)
_MEMBERSHIP_SCOPED_ROLES = (UserRole.TEACHER, UserRole.STUDENT)


class BatchService:
    """Batches and batch memberships.

    Membership rules (add_user): the user must belong to the batch's
    business and be a TEACHER or STUDENT; a (user, batch) pair exists once.
    """

    def __init__(
        self,
        batch_repo: Any,
        batch_user_repo: Any,
        user_repo: Any,
        access: AccessResolver,
    ) -> None:
        self._batches = batch_repo
        self._members = batch_user_repo
        self._users = user_repo
        self._access = access

    async def create(self, principal: Principal, data: Mapping[str, Any]) -> Any:
        """Create a batch under an accessible course; code_name must be unique."""
        await self._access.authorize(EntityKind.COURSE, data["course_id"], principal)
        if await self._batches.get_by_code_name(data["code_name"]):
            raise AlreadyExistsException("Batch with this code name already exists")
        batch = await self._batches.create(self._batches.model(**dict(data)))
        logger.info("Batch created: id=%s code=%s", batch.id, batch.code_name)
        return batch

    async def get(self, batch_id: int, options: QueryOptions | None = None) -> Any:
        batch = await self._batches.find_one((options or QueryOptions()).with_where(id=batch_id))
        if batch is None:
            raise ResourceNotFoundException("Batch", batch_id)
        return batch

    async def get_with_users(self, batch_id: int) -> Any:
        batch = await self._batches.get_with_users(batch_id)
        if batch is None:
            raise ResourceNotFoundException("Batch", batch_id)
        return batch

    async def list_for_course(
        self,
        principal: Principal,
        course_id: int,
        options: QueryOptions,
        active_only: bool = False,
    ) -> list[Any]:
        opts = options.with_where(course_id=course_id)
        if active_only:
            opts = opts.with_where(is_active=True)
        if principal.role is UserRole.TEACHER:
            opts = opts.with_where(member=self._batches.with_active_member(principal.id))
        return await self._batches.find_many(opts)

    async def list_visible(self, principal: Principal, options: QueryOptions) -> list[Any]:
        """Active batches the principal may see.

        SUPERADMIN sees all; everyone else only batches of their business,
        and teachers and students only batches they are active members of.
        """
        opts = options.with_where(is_active=True)
        if principal.is_super_admin:
            return await self._batches.find_many(opts)
        if principal.business_id is None:
            raise ForbiddenException(
                "User is not associated with a business", reason="no_business"
            )
        opts = opts.with_where(business=self._batches.in_business(principal.business_id))
        if principal.has_role(*_MEMBERSHIP_SCOPED_ROLES):
            opts = opts.with_where(member=self._batches.with_active_member(principal.id))
        return await self._batches.find_many(opts)

    async def update(self, batch_id: int, data: Mapping[str, Any]) -> Any:
        batch = await self._batches.get_by_id(batch_id)
        if batch is None:
            raise ResourceNotFoundException("Batch", batch_id)
        code_name = data.get("code_name")
        if code_name and code_name != batch.code_name:
            if await self._batches.get_by_code_name(code_name):
                raise AlreadyExistsException("Batch with this code name already exists")
        updated = await self._batches.update(batch, **dict(data))
        logger.info("Batch updated: id=%s", batch_id)
        return updated

    async def delete(self, batch_id: int) -> None:
        batch = await self._batches.get_by_id(batch_id)
        if batch is None:
            raise ResourceNotFoundException("Batch", batch_id)
        await self._batches.delete(batch)
        logger.info("Batch deleted: id=%s", batch_id)

    async def add_user(self, principal: Principal, user_id: int, batch_id: int) -> Any:
        """Enrol user_id in batch_id. Checks run in a fixed order, first failure wins."""
        batch = await self._batches.get_with_course(batch_id)
        if batch is None:
            raise ResourceNotFoundException("Batch", batch_id)
        exam = batch.course.exam if batch.course is not None else None
        if exam is None or exam.business_id is None:
            raise ValidationException("Batch is not associated with a valid business")
        business_id = exam.business_id
        await self._access.authorize_business(business_id, principal)

        user = await self._users.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("User", user_id)
        if user.business_id != business_id:
            raise ValidationException("User is not part of this business")
        if user.role not in _MEMBER_ROLES:
            raise ValidationException("Only Teachers and Students can be added to a batch")
        if await self._members.get_membership(user_id, batch_id):
            raise AlreadyExistsException("User is already in this batch")

        membership = await self._members.create(
            self._members.model(user_id=user_id, batch_id=batch_id, is_active=True)
        )
        logger.info("User %s added to batch %s by %s", user_id, batch_id, principal.id)
        return membership

    async def remove_user(self, principal: Principal, user_id: int, batch_id: int) -> None:
        """Drop a membership; the batch must resolve to a business the principal may manage."""
        await self._access.authorize(EntityKind.BATCH, batch_id, principal)
        membership = await self._members.get_membership(user_id, batch_id)
        if membership is None:
            raise ResourceNotFoundException("BatchUser", message="User is not in this batch")
        await self._members.delete(membership)
        logger.info("User %s removed from batch %s", user_id, batch_id)

    async def update_member(self, batch_id: int, user_id: int, is_active: bool) -> Any:
        membership = await self._members.get_membership(user_id, batch_id)
        if membership is None:
            raise ResourceNotFoundException("BatchUser", message="User is not in this batch")
        return await self._members.update(membership, is_active=is_active)

    async def list_for_user(self, user_id: int) -> list[Any]:
        return await self._members.list_for_user(user_id)

    async def list_members(self, batch_id: int, role: UserRole | None = None) -> list[Any]:
        return await self._members.list_for_batch(batch_id, role.value if role else None)
