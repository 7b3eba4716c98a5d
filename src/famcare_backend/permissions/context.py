from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field

from famcare_backend.model.enums import FamilyRole, ResourceVisibility, UserRole


class AccessContext(BaseModel):
    """Facts about one user and one resource that a single access decision is computed from"""

    user_id: str
    user_role: UserRole
    family_id: Optional[str] = None
    family_role: Optional[FamilyRole] = None
    resource_owner_id: Optional[str] = None
    resource_family_id: Optional[str] = None
    is_resource_public: bool = False

    model_config = ConfigDict(frozen=True)


class AccessUser(BaseModel):
    """Minimal view of an authenticated user as handed over by the user directory"""

    id: str
    role: UserRole
    family_id: Optional[str] = Field(None, description="Family the user belongs to")
    family_role: Optional[FamilyRole] = Field(None, description="Role of the user within the family")

    model_config = ConfigDict(from_attributes=True, frozen=True)


def get_attribute(obj: Any, name: str) -> Any:
    """Read a field from an ORM row, a pydantic model or a plain dict; None when absent"""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _is_public(resource: Any) -> bool:
    explicit = get_attribute(resource, "is_public")
    if explicit is not None:
        return bool(explicit)
    return get_attribute(resource, "visibility") == ResourceVisibility.PUBLIC


def create_access_context(user: Any, resource: Any = None) -> AccessContext:
    """
    Build an AccessContext from a user record and an optional resource record.

    Both arguments may be ORM rows, pydantic models or plain dicts. The resource
    owner is taken from ``uploaded_by`` and falls back to ``created_by``. A resource
    counts as public when it carries an explicit ``is_public`` flag or, failing that,
    when its visibility is PUBLIC.
    """
    return AccessContext(
        user_id=str(get_attribute(user, "id")),
        user_role=get_attribute(user, "role"),
        family_id=get_attribute(user, "family_id") or None,
        family_role=get_attribute(user, "family_role") or None,
        resource_owner_id=get_attribute(resource, "uploaded_by") or get_attribute(resource, "created_by") or None,
        resource_family_id=get_attribute(resource, "family_id") or None,
        is_resource_public=_is_public(resource) if resource is not None else False,
    )
