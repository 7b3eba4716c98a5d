from typing import List
from pydantic import BaseModel, Field

from famcare_backend.permissions.context import AccessContext
from famcare_backend.permissions.evaluator import evaluate_condition
from famcare_backend.permissions.levels import AccessLevel, highest_access_level
from famcare_backend.permissions.operations import Operation, required_level_for_operation
from famcare_backend.permissions.rules import AccessRule, ResourceType, RuleSetRegistry


class AccessDetails(BaseModel):
    access_level: AccessLevel = AccessLevel.NONE
    matched_rules: List[AccessRule] = Field(default_factory=list)
    can_read: bool = False
    can_write: bool = False
    can_delete: bool = False
    can_admin: bool = False


class AccessDecisionEngine:
    """Computes role based access levels from the rule sets of a registry"""

    def __init__(self, registry: RuleSetRegistry):
        self.registry = registry

    def matching_rules(self, context: AccessContext, resource_type: ResourceType) -> List[AccessRule]:
        """All rules of the resource type whose condition holds, in registration order"""
        rules = self.registry.get_rules(resource_type)
        if not rules:
            return []
        # Every rule is evaluated; the result is the maximum, not the first match
        return [rule for rule in rules if evaluate_condition(context, rule.condition)]

    def get_user_access_level(self, context: AccessContext, resource_type: ResourceType) -> AccessLevel:
        """Highest access level granted by any matching rule, NONE for unregistered types"""
        return highest_access_level(
            rule.access_level for rule in self.matching_rules(context, resource_type)
        )

    def has_access(self, context: AccessContext, resource_type: ResourceType,
                   required_level: AccessLevel) -> bool:
        return self.get_user_access_level(context, resource_type).is_sufficient_for(required_level)

    def can_perform_operation(self, context: AccessContext, resource_type: ResourceType,
                              operation: Operation | str) -> bool:
        return self.has_access(context, resource_type, required_level_for_operation(operation))

    def get_access_details(self, context: AccessContext, resource_type: ResourceType) -> AccessDetails:
        """Access level plus the rules it was derived from, for diagnostics and UI hints"""
        matched_rules = self.matching_rules(context, resource_type)
        level = highest_access_level(rule.access_level for rule in matched_rules)

        return AccessDetails(
            access_level=level,
            matched_rules=matched_rules,
            can_read=level.is_sufficient_for(AccessLevel.READ),
            can_write=level.is_sufficient_for(AccessLevel.WRITE),
            can_delete=level.is_sufficient_for(AccessLevel.DELETE),
            can_admin=level.is_sufficient_for(AccessLevel.ADMIN),
        )
