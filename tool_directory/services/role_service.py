"""
Role hierarchy checks.

Roles form a total order: user < vendor < admin. A caller satisfies a
required role when its own rank is at least the required rank.
"""
from typing import Optional, Union

from tool_directory.schemas.enums import Role

ROLE_RANKS = {
    Role.USER: 1,
    Role.VENDOR: 2,
    Role.ADMIN: 3,
}


def role_rank(role: Union[Role, str, None]) -> int:
    """Rank of a role; unknown or missing roles rank 0."""
    if role is None:
        return 0
    try:
        return ROLE_RANKS[Role(role)]
    except ValueError:
        return 0


def has_role(profile, required_role: Union[Role, str]) -> bool:
    if profile is None:
        return False
    return role_rank(profile.role) >= role_rank(required_role)


def is_admin(profile) -> bool:
    return profile is not None and role_rank(profile.role) == ROLE_RANKS[Role.ADMIN]


def is_vendor(profile) -> bool:
    # Admins can do everything a vendor can
    return has_role(profile, Role.VENDOR)


def can_access(profile, required_role: Optional[Union[Role, str]] = None) -> bool:
    if required_role is None:
        return profile is not None
    return has_role(profile, required_role)
