"""
Authorization policy.

Single decision point for every role and ownership check in the system.
Services resolve the resource (raising NotFoundError first), then ask this
module whether the actor may perform the action.

Rules:
  - Documents and ingestion jobs: admin, or the owning user
    (a job is owned through its document's uploader)
  - Document status, job update/delete, user listing/creation: admin only
  - User role/active flag changes and user deletion: admin only, never
    targeting the admin's own account
  - User profile reads/updates: the user themselves, or an admin

Dependencies: docmanager.core.exceptions, docmanager.core.roles
System role: Pure authorization decisions (no I/O, no side effects)
"""

import enum
from dataclasses import dataclass
from uuid import UUID

from docmanager.core.exceptions import ForbiddenError
from docmanager.core.roles import UserRole


class Action(str, enum.Enum):
    """Actions gated by the policy."""

    READ_DOCUMENT = "document:read"
    UPDATE_DOCUMENT = "document:update"
    SET_DOCUMENT_STATUS = "document:set_status"
    DELETE_DOCUMENT = "document:delete"
    READ_JOB = "job:read"
    CANCEL_JOB = "job:cancel"
    UPDATE_JOB = "job:update"
    DELETE_JOB = "job:delete"
    LIST_USERS = "user:list"
    CREATE_USER = "user:create"
    READ_USER = "user:read"
    UPDATE_USER_PROFILE = "user:update_profile"
    CHANGE_USER_ROLE = "user:change_role"
    TOGGLE_USER_STATUS = "user:toggle_status"
    DELETE_USER = "user:delete"


class _Rule(enum.Enum):
    OWNER_OR_ADMIN = "owner_or_admin"
    ADMIN_ONLY = "admin_only"
    ADMIN_NOT_SELF = "admin_not_self"


# action -> (rule, denial reason, self-target reason for ADMIN_NOT_SELF)
_RULES: dict[Action, tuple[_Rule, str, str | None]] = {
    Action.READ_DOCUMENT: (
        _Rule.OWNER_OR_ADMIN, "You can only access your own documents", None
    ),
    Action.UPDATE_DOCUMENT: (
        _Rule.OWNER_OR_ADMIN, "You can only update your own documents", None
    ),
    Action.SET_DOCUMENT_STATUS: (
        _Rule.ADMIN_ONLY, "Only admins can update document status", None
    ),
    Action.DELETE_DOCUMENT: (
        _Rule.OWNER_OR_ADMIN, "You can only delete your own documents", None
    ),
    Action.READ_JOB: (
        _Rule.OWNER_OR_ADMIN, "You can only access jobs for your own documents", None
    ),
    Action.CANCEL_JOB: (
        _Rule.OWNER_OR_ADMIN, "You can only cancel jobs for your own documents", None
    ),
    Action.UPDATE_JOB: (
        _Rule.ADMIN_ONLY, "Only admins can update ingestion jobs", None
    ),
    Action.DELETE_JOB: (
        _Rule.ADMIN_ONLY, "Only admins can delete ingestion jobs", None
    ),
    Action.LIST_USERS: (_Rule.ADMIN_ONLY, "Only admins can list users", None),
    Action.CREATE_USER: (_Rule.ADMIN_ONLY, "Only admins can create users", None),
    Action.READ_USER: (
        _Rule.OWNER_OR_ADMIN, "You can only view your own profile", None
    ),
    Action.UPDATE_USER_PROFILE: (
        _Rule.OWNER_OR_ADMIN, "You can only update your own profile", None
    ),
    Action.CHANGE_USER_ROLE: (
        _Rule.ADMIN_NOT_SELF,
        "Only admins can update user roles",
        "You cannot change your own role",
    ),
    Action.TOGGLE_USER_STATUS: (
        _Rule.ADMIN_NOT_SELF,
        "Only admins can update user status",
        "You cannot deactivate your own account",
    ),
    Action.DELETE_USER: (
        _Rule.ADMIN_NOT_SELF,
        "Only admins can delete users",
        "You cannot delete your own account",
    ),
}


@dataclass(frozen=True)
class Actor:
    """Authenticated user performing an operation."""

    id: UUID
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass(frozen=True)
class Decision:
    """Outcome of a policy check."""

    allowed: bool
    reason: str | None = None


ALLOW = Decision(allowed=True)


def decide(actor: Actor, action: Action, owner_id: UUID | None = None) -> Decision:
    """
    Decide whether an actor may perform an action.

    Args:
        actor: Authenticated user
        action: Requested action
        owner_id: Owning user of the resource; for user-targeted actions this
            is the target user's id

    Returns:
        Decision: allowed flag plus the denial reason
    """
    rule, reason, self_reason = _RULES[action]

    if rule is _Rule.OWNER_OR_ADMIN:
        if actor.is_admin or (owner_id is not None and actor.id == owner_id):
            return ALLOW
        return Decision(allowed=False, reason=reason)

    if not actor.is_admin:
        return Decision(allowed=False, reason=reason)

    if rule is _Rule.ADMIN_NOT_SELF and owner_id is not None and actor.id == owner_id:
        return Decision(allowed=False, reason=self_reason)

    return ALLOW


def authorize(actor: Actor, action: Action, owner_id: UUID | None = None) -> None:
    """
    Enforce a policy decision.

    Raises:
        ForbiddenError: If the decision denies the action
    """
    decision = decide(actor, action, owner_id)
    if not decision.allowed:
        raise ForbiddenError(
            decision.reason or "Forbidden",
            details={"action": action.value, "actor_id": str(actor.id)},
        )


def owner_scope(actor: Actor) -> UUID | None:
    """
    Owner filter for list operations.

    Admins see every resource (None); everyone else only their own.
    """
    return None if actor.is_admin else actor.id
