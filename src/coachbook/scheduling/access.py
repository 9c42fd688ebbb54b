"""Access guard: role and ownership checks for every entry point."""

import logging
from dataclasses import dataclass

from coachbook.enums import Role
from coachbook.exceptions import AuthzError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallerProfile:
    """Who is calling, as resolved by the identity collaborator."""

    id: int
    role: Role | None


@dataclass(frozen=True)
class Permit:
    """Proof that a caller passed ``authorize``."""

    profile_id: int
    role: Role | None


def authorize(
    caller: CallerProfile,
    required_role: Role | None = None,
    resource_owner_id: int | None = None,
) -> Permit:
    """Check the caller's role and, when given, ownership of the resource.

    Raises:
        AuthzError: if either check fails. The message is the same for both so
            it says nothing about the resource itself.
    """
    if required_role is not None and caller.role != required_role:
        logger.info(
            "Denied profile %s: role %s, needs %s",
            caller.id,
            caller.role.value if caller.role else None,
            required_role.value,
        )
        raise AuthzError("You are not allowed to perform this action")

    if resource_owner_id is not None and caller.id != resource_owner_id:
        logger.info("Denied profile %s: acting on behalf of %s", caller.id, resource_owner_id)
        raise AuthzError("You are not allowed to perform this action")

    return Permit(profile_id=caller.id, role=caller.role)
