import logging
from typing import Any, Optional

from famcare_backend.model.enums import ResourceVisibility, UserRole
from famcare_backend.permissions.context import get_attribute
from famcare_backend.permissions.store import AccessStore
from famcare_backend.permissions.visibility import build_visibility_predicate, evaluate_predicate

logger = logging.getLogger(__name__)


class ResourceVisibilityGate:
    """
    Second authorization layer applied to concrete resource instances.

    Independent of the rule engine: it looks at the resource's visibility tier,
    its system generated flag and the share and template assignment records,
    and can veto access the rule engine would otherwise grant.
    """

    def __init__(self, store: AccessStore):
        self.store = store

    def _resolve_family_id(self, resource: Any, user_id: str, user_role: UserRole,
                           family_id: Optional[str]) -> Optional[str]:
        if family_id is not None or user_role == UserRole.ADMIN:
            return family_id
        # Only FAMILY visibility depends on the user's family
        if get_attribute(resource, "visibility") != ResourceVisibility.FAMILY:
            return None
        user = self.store.get_user(user_id)
        return user.family_id if user is not None else None

    def check_resource_access(self, resource: Any, user_id: str, user_role: UserRole,
                              family_id: Optional[str] = None) -> bool:
        """
        Check whether a user may see a resource instance.

        The user's family is looked up through the store when not passed in and the
        resource is family visible.
        """
        family_id = self._resolve_family_id(resource, user_id, user_role, family_id)
        predicate = build_visibility_predicate(user_id, user_role, family_id)
        allowed = evaluate_predicate(predicate, resource, self.store)

        if not allowed:
            logger.debug(f"Resource {get_attribute(resource, 'id')} hidden from user {user_id} ({user_role})")

        return allowed
