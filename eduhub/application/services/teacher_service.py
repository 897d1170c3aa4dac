"""Teacher profile application service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from eduhub.application.services.access_resolver import AccessResolver
from eduhub.domain.exceptions import ResourceNotFoundException, ValidationException
from eduhub.domain.value_objects import Principal, QueryOptions

logger = logging.getLogger(__name__)


def _check_experience(professional: Mapping[str, Any]) -> None:
    years = professional.get("experience_years")
    if years is not None and years < 0:
        raise ValidationException("Experience years cannot be negative", field="experience_years")


class TeacherService:
    """One profile per user; professional and personal sections are flattened into the row."""

    def __init__(self, teacher_repo: Any, user_repo: Any, access: AccessResolver) -> None:
        self._teachers = teacher_repo
        self._users = user_repo
        self._access = access

    async def create(
        self,
        principal: Principal,
        user_id: int,
        business_id: int,
        professional: Mapping[str, Any],
        personal: Mapping[str, Any] | None = None,
    ) -> Any:
        """Create the teacher profile of user_id in business_id.

        Raises:
            ForbiddenException: principal may not act on business_id.
            ResourceNotFoundException: user does not exist.
            ValidationException: user in another business, profile exists, negative experience.
        """
        await self._access.authorize_business(business_id, principal)
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("User", user_id)
        if user.business_id != business_id:
            raise ValidationException("User does not belong to this business")
        if await self._teachers.get_by_user_id(user_id):
            raise ValidationException("Teacher profile already exists for this user")
        _check_experience(professional)

        teacher = await self._teachers.create(
            self._teachers.model(
                user_id=user_id,
                business_id=business_id,
                **dict(professional),
                **dict(personal or {}),
                created_by=principal.id,
            )
        )
        logger.info("Teacher profile created: id=%s user=%s", teacher.id, user_id)
        return teacher

    async def get(self, teacher_id: int, options: QueryOptions | None = None) -> Any:
        teacher = await self._teachers.find_one(
            (options or QueryOptions()).with_where(id=teacher_id)
        )
        if teacher is None:
            raise ResourceNotFoundException("Teacher", teacher_id, message="Teacher profile not found")
        return teacher

    async def update(
        self,
        principal: Principal,
        teacher_id: int,
        professional: Mapping[str, Any] | None = None,
        personal: Mapping[str, Any] | None = None,
        status: str | None = None,
    ) -> Any:
        teacher = await self._teachers.get_by_id(teacher_id)
        if teacher is None:
            raise ResourceNotFoundException("Teacher", teacher_id, message="Teacher profile not found")
        _check_experience(professional or {})
        updated = await self._teachers.update(
            teacher,
            **dict(professional or {}),
            **dict(personal or {}),
            status=status,
            updated_by=principal.id,
        )
        logger.info("Teacher profile updated: id=%s", teacher_id)
        return updated
