import logging
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict

from famcare_backend.permissions.conditions import (
    AccessCondition,
    all_of,
    is_admin,
    is_family_admin,
    is_family_member,
    is_owner,
    is_public,
)
from famcare_backend.permissions.levels import AccessLevel

logger = logging.getLogger(__name__)


class ResourceType(str, Enum):
    DOCUMENT = "DOCUMENT"
    MESSAGE = "MESSAGE"
    FAMILY = "FAMILY"
    USER = "USER"
    NOTIFICATION = "NOTIFICATION"
    CARE_PLAN = "CARE_PLAN"
    ACTIVITY = "ACTIVITY"


class AccessRule(BaseModel):
    condition: AccessCondition
    access_level: AccessLevel
    description: str

    model_config = ConfigDict(frozen=True)


class RuleSetRegistry:
    """
    Ordered access rules per resource type.

    The registry is built at configuration time and then only read. Replacing a
    rule set with set_rules while requests are being evaluated is not supported;
    there is no locking around it.
    """

    def __init__(self, rule_sets: Optional[Dict[ResourceType, Iterable[AccessRule]]] = None):
        self._rules: Dict[ResourceType, Tuple[AccessRule, ...]] = {}
        for resource_type, rules in (rule_sets or {}).items():
            self.set_rules(resource_type, rules)

    def set_rules(self, resource_type: ResourceType, rules: Iterable[AccessRule]):
        """Register (or replace) the rule set of a resource type"""
        if resource_type in self._rules:
            logger.warning(f"Replacing access rules for resource type {resource_type}")
        self._rules[resource_type] = tuple(rules)

    def get_rules(self, resource_type: ResourceType) -> Optional[Tuple[AccessRule, ...]]:
        """Get the rules of a resource type, None if the type is not registered"""
        return self._rules.get(resource_type)

    def resource_types(self) -> List[ResourceType]:
        return list(self._rules.keys())

    def __contains__(self, resource_type: ResourceType) -> bool:
        return resource_type in self._rules


def _rule(condition: AccessCondition, level: AccessLevel, description: str) -> AccessRule:
    return AccessRule(condition=condition, access_level=level, description=description)


def default_rule_sets() -> Dict[ResourceType, List[AccessRule]]:
    """Standard access rules of the application, one table per resource type"""
    return {
        ResourceType.DOCUMENT: [
            _rule(is_admin(), AccessLevel.ADMIN, "System administrators have full access to all documents"),
            _rule(is_owner(), AccessLevel.DELETE, "Document owners have full access to their documents"),
            _rule(all_of(is_family_admin(), is_family_member()), AccessLevel.WRITE,
                  "Family administrators can edit documents within their family"),
            _rule(is_family_member(), AccessLevel.READ, "Family members can view documents within their family"),
            _rule(is_public(), AccessLevel.READ, "Anyone can view public documents"),
        ],
        ResourceType.MESSAGE: [
            _rule(is_admin(), AccessLevel.ADMIN, "System administrators have full access to all messages"),
            _rule(is_owner(), AccessLevel.DELETE, "Message senders can edit and delete their messages"),
            _rule(is_family_member(), AccessLevel.READ,
                  "Family members can view messages in their family conversations"),
        ],
        ResourceType.FAMILY: [
            _rule(is_admin(), AccessLevel.ADMIN, "System administrators have full access to all families"),
            _rule(is_owner(), AccessLevel.DELETE, "Family creators have full access to their families"),
            # Not scoped by is_family_member: any family admin matches
            _rule(is_family_admin(), AccessLevel.WRITE, "Family administrators can manage their family"),
            _rule(is_family_member(), AccessLevel.READ, "Family members can view their family information"),
        ],
        ResourceType.USER: [
            _rule(is_admin(), AccessLevel.ADMIN, "System administrators have full access to all users"),
            _rule(is_owner(), AccessLevel.WRITE, "Users can edit their own profile"),
            # Not scoped by is_family_member: any family admin matches
            _rule(is_family_admin(), AccessLevel.READ, "Family administrators can view their family members"),
            _rule(is_family_member(), AccessLevel.READ, "Family members can view other family members"),
        ],
        ResourceType.NOTIFICATION: [
            _rule(is_admin(), AccessLevel.ADMIN, "System administrators have full access to all notifications"),
            _rule(is_owner(), AccessLevel.DELETE, "Users have full access to their own notifications"),
        ],
        ResourceType.CARE_PLAN: [
            _rule(is_admin(), AccessLevel.ADMIN, "System administrators have full access to all care plans"),
            _rule(is_owner(), AccessLevel.DELETE, "Care plan creators have full access to their plans"),
            _rule(all_of(is_family_admin(), is_family_member()), AccessLevel.WRITE,
                  "Family administrators can manage care plans within their family"),
            _rule(is_family_member(), AccessLevel.READ, "Family members can view care plans within their family"),
        ],
        ResourceType.ACTIVITY: [
            _rule(is_admin(), AccessLevel.ADMIN, "System administrators have full access to all activities"),
            _rule(is_owner(), AccessLevel.DELETE, "Activity creators have full access to their activities"),
            _rule(is_family_member(), AccessLevel.READ, "Family members can view activities within their family"),
        ],
    }


def default_registry() -> RuleSetRegistry:
    return RuleSetRegistry(default_rule_sets())
