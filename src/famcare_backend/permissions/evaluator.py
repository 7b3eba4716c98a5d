import logging
from typing import Any

from famcare_backend.model.enums import FamilyRole, UserRole
from famcare_backend.permissions.conditions import (
    AllOf, AnyOf, IsAdmin, IsFamilyAdmin, IsFamilyMember,
    IsOwner, IsPublic, IsSystemResource, Negate
)
from famcare_backend.permissions.context import AccessContext

logger = logging.getLogger(__name__)

FAMILY_ADMIN_ROLES = (FamilyRole.FAMILY_ADMIN, FamilyRole.PRIMARY_CONTACT)


def evaluate_condition(context: AccessContext, condition: Any) -> bool:
    """
    Evaluate a condition tree against the facts of a context.

    Pure and deterministic. An empty AllOf is true, an empty AnyOf is false.
    Anything that is not a known condition node evaluates to False and is logged.
    """
    if isinstance(condition, IsAdmin):
        return context.user_role == UserRole.ADMIN

    if isinstance(condition, IsOwner):
        return bool(context.resource_owner_id) and context.user_id == context.resource_owner_id

    if isinstance(condition, IsFamilyMember):
        return bool(context.family_id) and context.family_id == context.resource_family_id

    if isinstance(condition, IsFamilyAdmin):
        return context.family_role in FAMILY_ADMIN_ROLES

    if isinstance(condition, IsPublic):
        return bool(context.is_resource_public)

    if isinstance(condition, IsSystemResource):
        return not context.resource_family_id

    if isinstance(condition, AllOf):
        return all(evaluate_condition(context, c) for c in condition.conditions)

    if isinstance(condition, AnyOf):
        return any(evaluate_condition(context, c) for c in condition.conditions)

    if isinstance(condition, Negate):
        return not evaluate_condition(context, condition.condition)

    logger.warning(f"Unknown access condition {condition!r}, treating as not satisfied")
    return False
