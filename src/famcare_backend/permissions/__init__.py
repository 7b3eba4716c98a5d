"""
Authorization core for the family care backend.

Main components:
- conditions / evaluator: condition trees over an AccessContext and their evaluation
- rules: per resource type rule sets held by an explicitly constructed RuleSetRegistry
- engine: AccessDecisionEngine computing access levels from a registry
- visibility / gate: visibility predicate and the ResourceVisibilityGate for resource instances
- query_builders: the same visibility predicate compiled into list query filters
- operations / guards: CRUD operation mapping and handler decorators
- store: lookups of shares, template assignments and users
"""

from .levels import AccessLevel, is_access_level_sufficient, highest_access_level

from .context import AccessContext, AccessUser, create_access_context

from .conditions import (
    AccessCondition,
    all_of,
    any_of,
    negate,
    is_admin,
    is_owner,
    is_family_member,
    is_family_admin,
    is_public,
    is_system_resource,
)

from .evaluator import evaluate_condition

from .rules import (
    AccessRule,
    ResourceType,
    RuleSetRegistry,
    default_registry,
    default_rule_sets,
)

from .operations import Operation, required_level_for_operation

from .engine import AccessDecisionEngine, AccessDetails

from .store import AccessStore, SqlAccessStore

from .gate import ResourceVisibilityGate

from .query_builders import ResourceVisibilityQueryBuilder

from .guards import (
    with_access_control,
    enforce_operation,
    authorize_resource_operation,
    enforce_resource_operation,
    require_admin,
    require_family_admin,
    check_family_access,
    check_resource_ownership,
)

from .audit import AccessEvent, log_access_event

__all__ = [
    # Levels and context
    "AccessLevel",
    "is_access_level_sufficient",
    "highest_access_level",
    "AccessContext",
    "AccessUser",
    "create_access_context",

    # Conditions
    "AccessCondition",
    "all_of",
    "any_of",
    "negate",
    "is_admin",
    "is_owner",
    "is_family_member",
    "is_family_admin",
    "is_public",
    "is_system_resource",
    "evaluate_condition",

    # Rules and engine
    "AccessRule",
    "ResourceType",
    "RuleSetRegistry",
    "default_registry",
    "default_rule_sets",
    "Operation",
    "required_level_for_operation",
    "AccessDecisionEngine",
    "AccessDetails",

    # Resource visibility
    "AccessStore",
    "SqlAccessStore",
    "ResourceVisibilityGate",
    "ResourceVisibilityQueryBuilder",

    # Guards
    "with_access_control",
    "enforce_operation",
    "authorize_resource_operation",
    "enforce_resource_operation",
    "require_admin",
    "require_family_admin",
    "check_family_access",
    "check_resource_ownership",

    # Audit
    "AccessEvent",
    "log_access_event",
]
