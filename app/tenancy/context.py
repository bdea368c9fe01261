"""Request tenant context carried from the access token to the data layer"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from app.exceptions import TenantContextError
from app.models.restaurant import PLATFORM_ORGANIZATION_ID
from app.models.user import UserRole, PLATFORM_ROLES


@dataclass(frozen=True)
class TenantContext:
    """
    Immutable identity of the caller for a single request.

    Attributes:
        user_id: Authenticated user id (``None`` for anonymous public requests)
        restaurant_id: Tenant the request is scoped to
        role: Role of the caller within that tenant
        email: Caller email, informational only
    """

    user_id: Optional[int]
    restaurant_id: int
    role: UserRole
    email: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.restaurant_id, int) or self.restaurant_id <= 0:
            raise TenantContextError("Invalid restaurant scope")

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any]) -> "TenantContext":
        """Build a context from decoded JWT claims.

        Every scoping field must be present and well formed; nothing is
        defaulted.
        """
        user_id = _positive_int(claims.get("user_id"), "user_id")
        restaurant_id = _positive_int(claims.get("restaurant_id"), "restaurant_id")

        raw_role = claims.get("role")
        try:
            role = UserRole(raw_role)
        except ValueError:
            raise TenantContextError("Token is missing a valid role")

        return cls(
            user_id=user_id,
            restaurant_id=restaurant_id,
            role=role,
            email=claims.get("email"),
        )

    @classmethod
    def for_public(cls, restaurant_id: int) -> "TenantContext":
        """Anonymous context for the public menu and booking pages"""
        return cls(user_id=None, restaurant_id=restaurant_id, role=UserRole.CLIENT)

    def for_tenant(self, restaurant_id: int, role: UserRole) -> "TenantContext":
        """Same actor, scoped to another tenant with the given role"""
        return TenantContext(
            user_id=self.user_id,
            restaurant_id=restaurant_id,
            role=role,
            email=self.email,
        )

    @property
    def is_platform_staff(self) -> bool:
        """KAM or Admin of the platform organization.

        Membership needs both the role and the platform tenant, so an Admin
        of an ordinary restaurant is not platform staff.
        """
        return self.restaurant_id == PLATFORM_ORGANIZATION_ID and self.role in PLATFORM_ROLES

    @property
    def is_kam(self) -> bool:
        return self.is_platform_staff and self.role == UserRole.KAM


def _positive_int(value: Any, field: str) -> int:
    # bool is an int subclass and never a valid id
    if isinstance(value, bool) or value is None:
        raise TenantContextError(f"Token is missing {field}")
    if isinstance(value, float) and not value.is_integer():
        raise TenantContextError(f"Token has an invalid {field}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise TenantContextError(f"Token has an invalid {field}")
    if number <= 0:
        raise TenantContextError(f"Token has an invalid {field}")
    return number
