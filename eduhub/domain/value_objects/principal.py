"""Principal: the authenticated actor of a request."""

from dataclasses import dataclass

from eduhub.domain.enums import UserRole


@dataclass(frozen=True)
class Principal:
    """Authenticated actor (from verified access-token claims).

    business_id is None for users not yet attached to a business.
    """

    id: int
    role: UserRole
    business_id: int | None = None
    email: str | None = None

    @property
    def is_super_admin(self) -> bool:
        return self.role is UserRole.SUPERADMIN

    def has_role(self, *roles: UserRole) -> bool:
        """Return True if the principal holds one of roles."""
        return self.role in roles
