"""Exam application service. Exams are soft deleted (status INACTIVE)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from eduhub.application.services.access_resolver import AccessResolver
from eduhub.domain.enums import RecordStatus, UserRole
from eduhub.domain.exceptions import ResourceNotFoundException, ValidationException
from eduhub.domain.value_objects import Principal, QueryOptions

logger = logging.getLogger(__name__)

_DUPLICATE_NAME = "Exam with this name already exists for this business"


class ExamService:
    def __init__(self, exam_repo: Any, access: AccessResolver) -> None:
        self._exams = exam_repo
        self._access = access

    async def create(self, principal: Principal, data: Mapping[str, Any]) -> Any:
        """Create an exam in data['business_id'] after checking business access and name."""
        business_id = data["business_id"]
        await self._access.authorize_business(business_id, principal)
        if await self._exams.find_active_by_name(business_id, data["name"]):
            raise ValidationException(_DUPLICATE_NAME, field="name")
        exam = await self._exams.create(
            self._exams.model(**dict(data), created_by=principal.id)
        )
        logger.info("Exam created: id=%s business=%s", exam.id, business_id)
        return exam

    async def get(self, exam_id: int, options: QueryOptions | None = None) -> Any:
        exam = await self._exams.find_one((options or QueryOptions()).with_where(id=exam_id))
        if exam is None:
            raise ResourceNotFoundException("Exam", exam_id)
        return exam

    async def list_for_business(
        self, principal: Principal, business_id: int, options: QueryOptions
    ) -> list[Any]:
        """ACTIVE exams of the business; teachers only see exams they teach in."""
        opts = options.with_where(business_id=business_id, status=RecordStatus.ACTIVE.value)
        if principal.role is UserRole.TEACHER:
            opts = opts.with_where(taught_by=self._exams.taught_by(principal.id))
        return await self._exams.find_many(opts)

    async def update(self, principal: Principal, exam_id: int, data: Mapping[str, Any]) -> Any:
        exam = await self._exams.get_by_id(exam_id)
        if exam is None:
            raise ResourceNotFoundException("Exam", exam_id)
        name = data.get("name")
        if name and await self._exams.find_active_by_name(exam.business_id, name, exclude_id=exam_id):
            raise ValidationException(_DUPLICATE_NAME, field="name")
        updated = await self._exams.update(exam, **dict(data), updated_by=principal.id)
        logger.info("Exam updated: id=%s", exam_id)
        return updated

    async def delete(self, principal: Principal, exam_id: int) -> None:
        exam = await self._exams.get_by_id(exam_id)
        if exam is None:
            raise ResourceNotFoundException("Exam", exam_id)
        await self._exams.update(
            exam, status=RecordStatus.INACTIVE.value, updated_by=principal.id
        )
        logger.info("Exam soft-deleted: id=%s", exam_id)
