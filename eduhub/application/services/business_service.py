"""Business application service: create (and attach creator), read, update, delete."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from eduhub.domain.exceptions import AlreadyExistsException, ResourceNotFoundException
from eduhub.domain.value_objects import Principal, QueryOptions

logger = logging.getLogger(__name__)


class BusinessService:
    """Businesses are tenants; the user who creates one becomes attached to it."""

    def __init__(self, business_repo: Any, user_repo: Any) -> None:
        self._businesses = business_repo
        self._users = user_repo

    async def create(self, principal: Principal, data: Mapping[str, Any]) -> Any:
        """Create a business and set the creator's business_id.

        Raises:
            AlreadyExistsException: slug already used.
        """
        slug = data["slug"]
        if await self._businesses.get_by_slug(slug):
            raise AlreadyExistsException(f"Business with slug '{slug}' already exists")
        business = await self._businesses.create(self._businesses.model(**dict(data)))
        creator = await self._users.get_by_id(principal.id)
        if creator is not None:
            await self._users.update(creator, business_id=business.id)
        logger.info("Business created: id=%s slug=%s by user %s", business.id, slug, principal.id)
        return business

    async def get(self, business_id: int, options: QueryOptions | None = None) -> Any:
        business = await self._businesses.find_one(
            (options or QueryOptions()).with_where(id=business_id)
        )
        if business is None:
            raise ResourceNotFoundException("Business", business_id)
        return business

    async def get_by_slug(self, slug: str, options: QueryOptions | None = None) -> Any:
        business = await self._businesses.find_one((options or QueryOptions()).with_where(slug=slug))
        if business is None:
            raise ResourceNotFoundException("Business", slug)
        return business

    async def update(self, business_id: int, data: Mapping[str, Any]) -> Any:
        """Partial update; a new slug must not be taken by another business."""
        business = await self._businesses.get_by_id(business_id)
        if business is None:
            raise ResourceNotFoundException("Business", business_id)
        slug = data.get("slug")
        if slug and slug != business.slug and await self._businesses.get_by_slug(slug):
            raise AlreadyExistsException(f"Slug '{slug}' is already taken")
        updated = await self._businesses.update(business, **dict(data))
        logger.info("Business updated: id=%s", business_id)
        return updated

    async def delete(self, business_id: int) -> None:
        business = await self._businesses.get_by_id(business_id)
        if business is None:
            raise ResourceNotFoundException("Business", business_id)
        await self._businesses.delete(business)
        logger.info("Business deleted: id=%s", business_id)
