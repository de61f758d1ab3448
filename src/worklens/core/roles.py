"""Project ownership and co-admin resolution - pure, no I/O."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .records import AliasChain, field, first_present, nested


@dataclass(frozen=True)
class RoleResult:
    """A user's relationship to a project."""

    is_owner: bool = False
    is_co_admin: bool = False


def _owner_ref(project: Any) -> Any:
    """``userId`` as a plain id; a populated user object is handled by OWNER_ID."""
    value = field("userId")(project)
    return None if isinstance(value, Mapping) else value


# userId may be a populated user object or a bare id
OWNER_ID: AliasChain = (
    nested("userId", "_id"),
    nested("userId", "id"),
    _owner_ref,
    field("creatorId"),
    field("creatorUserId"),
)
CREATOR_NAME: AliasChain = (field("creatorName"), nested("userId", "name"))
MEMBER_ID: AliasChain = (field("id"), field("_id"))


def _member_id(member: Any) -> Any:
    if isinstance(member, Mapping):
        return first_present(member, MEMBER_ID)
    return member


def is_owner(project: Any, user_id: Any, user_name: str | None) -> bool:
    """
    Owner if the project's owner id matches ``user_id``, or failing that,
    if its creator name matches ``user_name`` (trimmed, case-insensitive).
    Either signal is sufficient.
    """
    if not isinstance(project, Mapping):
        return False

    owner_id = first_present(project, OWNER_ID)
    if user_id and owner_id is not None and str(user_id) == str(owner_id):
        return True

    creator_name = first_present(project, CREATOR_NAME)
    if not user_name or not isinstance(creator_name, str):
        return False
    return user_name.strip().lower() == creator_name.strip().lower()


def is_co_admin(project: Any, user_id: Any) -> bool:
    """True when ``user_id`` is listed in the project's coAdmins."""
    if not isinstance(project, Mapping) or not user_id:
        return False
    admins = project.get("coAdmins")
    if not isinstance(admins, (list, tuple)):
        return False
    for admin in admins:
        admin_id = _member_id(admin)
        if admin_id and str(admin_id) == str(user_id):
            return True
    return False


def resolve_role(project: Any, user_id: Any, user_name: str | None) -> RoleResult:
    """Resolve owner and co-admin flags; missing arguments resolve to False."""
    return RoleResult(
        is_owner=is_owner(project, user_id, user_name),
        is_co_admin=is_co_admin(project, user_id),
    )
