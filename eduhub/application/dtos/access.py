"""DTOs for ownership lookups and access decisions (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class OwnerRef:
    """One hop of an ownership chain: an entity id and its parent reference.

    parent_id is the id of the next entity up the chain (for exams, courses
    etc.) or the business id for entities owned directly by a business.
    owner_user_id is set for entities owned by a single user (teacher
    profiles).
    """

    id: int
    parent_id: int | None
    owner_user_id: int | None = None


@dataclass(frozen=True)
class ResolvedOwnership:
    """Result of walking a chain to its business.

    batch_id is set when the chain passes through a batch, so membership
    checks can run without another walk.
    """

    business_id: int
    batch_id: int | None = None
    owner_user_id: int | None = None
