"""Hierarchical access resolver: tenant and membership checks over ownership chains.

Every protected entity belongs to exactly one business through a chain of
parent references (Content -> Batch -> Course -> Exam -> Business). The
resolver walks that chain for the requested entity and applies one policy:

1. entity missing                  -> ResourceNotFoundException (404)
2. a hop of the chain missing      -> ForbiddenException, "not correctly associated"
3. SUPERADMIN, the owning user, or same business -> allowed; otherwise Forbidden
4. batch-scoped entities (batch, content) additionally require an active
   batch membership for every role except SUPERADMIN and ADMIN.

The walk per entity kind is a ChainResolver registered in CHAIN_RESOLVERS;
the policy itself lives only in AccessResolver.authorize.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from eduhub.application.dtos.access import OwnerRef, ResolvedOwnership
from eduhub.application.interfaces.services import IOwnershipLookup
from eduhub.domain.enums import EntityKind, UserRole
from eduhub.domain.exceptions import ForbiddenException, ResourceNotFoundException
from eduhub.domain.value_objects import Principal

logger = logging.getLogger(__name__)

# Kinds whose access also depends on batch membership.
_BATCH_SCOPED: frozenset[EntityKind] = frozenset({EntityKind.BATCH, EntityKind.CONTENT})
_MEMBERSHIP_EXEMPT_ROLES: tuple[UserRole, ...] = (UserRole.SUPERADMIN, UserRole.ADMIN)


def _with_article(kind: EntityKind) -> str:
    name = kind.value
    return f"an {name}" if name[0] in "aeiou" else f"a {name}"


class OwnershipWalker:
    """Per-call helper around IOwnershipLookup: memoises hops and raises on gaps."""

    def __init__(self, lookup: IOwnershipLookup, target: EntityKind) -> None:
        self._lookup = lookup
        self._target = target
        self._seen: dict[tuple[EntityKind, int], OwnerRef | None] = {}

    async def _get(self, kind: EntityKind, entity_id: int) -> OwnerRef | None:
        key = (kind, entity_id)
        if key not in self._seen:
            self._seen[key] = await self._lookup.get_ref(kind, entity_id)
        return self._seen[key]

    def broken(self, missing: EntityKind) -> ForbiddenException:
        return ForbiddenException(
            f"{self._target.label} is not correctly associated with {_with_article(missing)}",
            reason="broken_chain",
        )

    async def start(self, kind: EntityKind, entity_id: int) -> OwnerRef:
        """Load the target entity; ResourceNotFoundException if absent."""
        ref = await self._get(kind, entity_id)
        if ref is None:
            raise ResourceNotFoundException(kind.label, entity_id)
        return ref

    async def up(self, child: OwnerRef, parent_kind: EntityKind) -> OwnerRef:
        """Follow child.parent_id to a parent_kind row; Forbidden if the link is missing."""
        if child.parent_id is None:
            raise self.broken(parent_kind)
        parent = await self._get(parent_kind, child.parent_id)
        if parent is None:
            raise self.broken(parent_kind)
        return parent


ChainResolver = Callable[[OwnershipWalker, int], Awaitable[ResolvedOwnership]]


def _chain(*hops: EntityKind) -> ChainResolver:
    """Build a resolver walking hops[0] -> hops[1] -> ... and then to the business.

    The last hop's parent_id is the business id.
    """

    async def resolve(walker: OwnershipWalker, entity_id: int) -> ResolvedOwnership:
        ref = await walker.start(hops[0], entity_id)
        owner_user_id = ref.owner_user_id
        batch_id = ref.id if hops[0] is EntityKind.BATCH else None
        for parent_kind in hops[1:]:
            ref = await walker.up(ref, parent_kind)
            if parent_kind is EntityKind.BATCH:
                batch_id = ref.id
        if ref.parent_id is None:
            raise walker.broken(EntityKind.BUSINESS)
        return ResolvedOwnership(
            business_id=ref.parent_id,
            batch_id=batch_id,
            owner_user_id=owner_user_id,
        )

    return resolve


async def _resolve_business(walker: OwnershipWalker, business_id: int) -> ResolvedOwnership:
    ref = await walker.start(EntityKind.BUSINESS, business_id)
    return ResolvedOwnership(business_id=ref.id)


CHAIN_RESOLVERS: dict[EntityKind, ChainResolver] = {
    EntityKind.BUSINESS: _resolve_business,
    EntityKind.EXAM: _chain(EntityKind.EXAM),
    EntityKind.COURSE: _chain(EntityKind.COURSE, EntityKind.EXAM),
    EntityKind.SUBJECT: _chain(EntityKind.SUBJECT, EntityKind.COURSE, EntityKind.EXAM),
    EntityKind.BATCH: _chain(EntityKind.BATCH, EntityKind.COURSE, EntityKind.EXAM),
    EntityKind.CONTENT: _chain(
        EntityKind.CONTENT, EntityKind.BATCH, EntityKind.COURSE, EntityKind.EXAM
    ),
    EntityKind.TEACHER: _chain(EntityKind.TEACHER),
    EntityKind.USER: _chain(EntityKind.USER),
}


class AccessResolver:
    """Decides whether a principal may act on an entity (read-only lookups only)."""

    def __init__(
        self,
        lookup: IOwnershipLookup,
        chains: dict[EntityKind, ChainResolver] | None = None,
    ) -> None:
        self._lookup = lookup
        self._chains = chains if chains is not None else CHAIN_RESOLVERS

    async def resolve(self, kind: EntityKind, entity_id: int) -> ResolvedOwnership:
        """Walk the ownership chain of (kind, entity_id) without applying any policy."""
        walker = OwnershipWalker(self._lookup, kind)
        return await self._chains[kind](walker, entity_id)

    async def authorize(
        self, kind: EntityKind, entity_id: int, principal: Principal
    ) -> ResolvedOwnership:
        """Raise unless principal may access (kind, entity_id); return the resolved chain."""
        resolved = await self.resolve(kind, entity_id)
        if not self._tenant_allows(principal, resolved):
            logger.info(
                "Access denied: user %s (%s, business %s) -> %s %s (business %s)",
                principal.id,
                principal.role.value,
                principal.business_id,
                kind.value,
                entity_id,
                resolved.business_id,
            )
            raise ForbiddenException(
                f"You do not have access to this {kind.value}", reason="tenant_mismatch"
            )
        if (
            kind in _BATCH_SCOPED
            and resolved.batch_id is not None
            and not principal.has_role(*_MEMBERSHIP_EXEMPT_ROLES)
        ):
            await self.require_active_membership(principal, resolved.batch_id)
        return resolved

    async def authorize_business(self, business_id: int, principal: Principal) -> None:
        """Shortcut for authorize(EntityKind.BUSINESS, ...)."""
        await self.authorize(EntityKind.BUSINESS, business_id, principal)

    async def require_active_membership(self, principal: Principal, batch_id: int) -> None:
        """Raise ForbiddenException unless principal has an active membership in batch_id."""
        status = await self._lookup.get_membership_status(principal.id, batch_id)
        if status is None:
            raise ForbiddenException(
                "You are not a member of this batch", reason="not_a_member"
            )
        if not status:
            raise ForbiddenException(
                "Your membership in this batch is not active", reason="membership_inactive"
            )

    @staticmethod
    def _tenant_allows(principal: Principal, resolved: ResolvedOwnership) -> bool:
        if principal.is_super_admin:
            return True
        if resolved.owner_user_id is not None and resolved.owner_user_id == principal.id:
            return True
        return principal.business_id is not None and principal.business_id == resolved.business_id
