"""
Decision engine tests over the default rule tables and small custom registries.
"""

import pytest

from famcare_backend.model.enums import FamilyRole, UserRole
from famcare_backend.permissions.conditions import is_admin, is_family_admin, is_family_member, is_owner
from famcare_backend.permissions.engine import AccessDecisionEngine
from famcare_backend.permissions.levels import AccessLevel
from famcare_backend.permissions.operations import Operation
from famcare_backend.permissions.rules import (
    AccessRule, ResourceType, RuleSetRegistry, default_registry, default_rule_sets
)
from famcare_backend.tests.conftest import make_context


def rule(condition, level, description="test rule"):
    return AccessRule(condition=condition, access_level=level, description=description)


class TestUnregisteredTypes:

    @pytest.mark.parametrize("role", list(UserRole))
    def test_unregistered_type_yields_none(self, role):
        engine = AccessDecisionEngine(RuleSetRegistry())
        context = make_context(user_role=role, resource_owner_id="u1")
        assert engine.get_user_access_level(context, ResourceType.DOCUMENT) == AccessLevel.NONE
        assert not engine.has_access(context, ResourceType.DOCUMENT, AccessLevel.READ)

    def test_unregistered_type_details_are_empty(self):
        details = AccessDecisionEngine(RuleSetRegistry()).get_access_details(make_context(), ResourceType.USER)
        assert details.access_level == AccessLevel.NONE
        assert details.matched_rules == []
        assert not any([details.can_read, details.can_write, details.can_delete, details.can_admin])

    def test_none_is_still_sufficient_for_none(self):
        engine = AccessDecisionEngine(RuleSetRegistry())
        assert engine.has_access(make_context(), ResourceType.DOCUMENT, AccessLevel.NONE)


class TestHighestMatchWins:

    @pytest.mark.parametrize("rules", [
        [rule(is_owner(), AccessLevel.DELETE), rule(is_family_member(), AccessLevel.READ)],
        [rule(is_family_member(), AccessLevel.READ), rule(is_owner(), AccessLevel.DELETE)],
    ])
    def test_highest_level_regardless_of_rule_order(self, rules):
        engine = AccessDecisionEngine(RuleSetRegistry({ResourceType.DOCUMENT: rules}))
        context = make_context(resource_owner_id="u1", family_id="F1", resource_family_id="F1")
        assert engine.get_user_access_level(context, ResourceType.DOCUMENT) == AccessLevel.DELETE

    def test_middle_rule_is_not_shadowed(self):
        rules = [
            rule(is_family_member(), AccessLevel.READ),
            rule(is_owner(), AccessLevel.DELETE),
            rule(is_family_member(), AccessLevel.WRITE),
        ]
        engine = AccessDecisionEngine(RuleSetRegistry({ResourceType.DOCUMENT: rules}))
        context = make_context(resource_owner_id="u1", family_id="F1", resource_family_id="F1")
        details = engine.get_access_details(context, ResourceType.DOCUMENT)
        assert details.access_level == AccessLevel.DELETE
        assert len(details.matched_rules) == 3

    def test_matched_rules_keep_registration_order(self, engine):
        context = make_context(family_id="F1", resource_family_id="F1", is_resource_public=True)
        details = engine.get_access_details(context, ResourceType.DOCUMENT)
        assert [r.description for r in details.matched_rules] == [
            "Family members can view documents within their family",
            "Anyone can view public documents",
        ]
        assert details.access_level == AccessLevel.READ
        assert details.can_read and not details.can_write


class TestDefaultTables:

    def test_every_type_has_its_own_table(self):
        registry = default_registry()
        assert set(registry.resource_types()) == set(ResourceType)
        tables = default_rule_sets()
        descriptions = {t: tuple(r.description for r in rules) for t, rules in tables.items()}
        assert len(set(descriptions.values())) == len(ResourceType)

    @pytest.mark.parametrize("resource_type", list(ResourceType))
    @pytest.mark.parametrize("level", list(AccessLevel))
    def test_admin_satisfies_every_level(self, engine, resource_type, level):
        context = make_context(user_role=UserRole.ADMIN)
        assert engine.has_access(context, resource_type, level)

    def test_document_owner_can_delete(self, engine):
        context = make_context(resource_owner_id="u1", resource_family_id="F9")
        assert engine.can_perform_operation(context, ResourceType.DOCUMENT, Operation.DELETE)
        assert not engine.has_access(context, ResourceType.DOCUMENT, AccessLevel.ADMIN)

    def test_document_family_admin_writes_only_in_own_family(self, engine):
        context = make_context(family_id="F1", family_role=FamilyRole.FAMILY_ADMIN, resource_family_id="F1")
        assert engine.get_user_access_level(context, ResourceType.DOCUMENT) == AccessLevel.WRITE

        other_family = context.model_copy(update={"resource_family_id": "F2"})
        assert engine.get_user_access_level(other_family, ResourceType.DOCUMENT) == AccessLevel.NONE

    def test_public_document_is_readable_by_anyone(self, engine):
        context = make_context(is_resource_public=True)
        assert engine.can_perform_operation(context, ResourceType.DOCUMENT, "read")
        assert not engine.can_perform_operation(context, ResourceType.DOCUMENT, "update")

    def test_user_profile_owner_can_write_not_delete(self, engine):
        context = make_context(resource_owner_id="u1")
        assert engine.get_user_access_level(context, ResourceType.USER) == AccessLevel.WRITE
        assert not engine.can_perform_operation(context, ResourceType.USER, Operation.DELETE)

    def test_notifications_are_private_to_owner(self, engine):
        context = make_context(family_id="F1", resource_family_id="F1", resource_owner_id="u2")
        assert engine.get_user_access_level(context, ResourceType.NOTIFICATION) == AccessLevel.NONE

    def test_message_family_member_reads(self, engine):
        context = make_context(family_id="F1", resource_family_id="F1")
        assert engine.get_user_access_level(context, ResourceType.MESSAGE) == AccessLevel.READ


class TestFamilyAdminScope:
    """The bare is_family_admin rules are not scoped to the resource's family."""

    def test_bare_family_admin_rule_grants_across_families(self):
        engine = AccessDecisionEngine(RuleSetRegistry({
            ResourceType.FAMILY: [rule(is_family_admin(), AccessLevel.WRITE)],
        }))
        context = make_context(family_id="F1", family_role=FamilyRole.FAMILY_ADMIN, resource_family_id="F2")
        assert engine.get_user_access_level(context, ResourceType.FAMILY) == AccessLevel.WRITE

    def test_default_family_table_grants_write_to_other_family_admin(self, engine):
        context = make_context(family_id="F1", family_role=FamilyRole.FAMILY_ADMIN, resource_family_id="F2")
        assert engine.get_user_access_level(context, ResourceType.FAMILY) == AccessLevel.WRITE
        assert engine.get_user_access_level(context, ResourceType.USER) == AccessLevel.READ


class TestRegistry:

    def test_set_rules_replaces_table(self):
        registry = RuleSetRegistry({ResourceType.DOCUMENT: [rule(is_admin(), AccessLevel.ADMIN)]})
        registry.set_rules(ResourceType.DOCUMENT, [rule(is_owner(), AccessLevel.READ)])
        rules = registry.get_rules(ResourceType.DOCUMENT)
        assert len(rules) == 1 and rules[0].access_level == AccessLevel.READ

    def test_registries_are_independent(self):
        first = RuleSetRegistry()
        second = default_registry()
        first.set_rules(ResourceType.DOCUMENT, [])
        assert ResourceType.DOCUMENT in first
        assert len(second.get_rules(ResourceType.DOCUMENT)) == 5

    def test_empty_table_grants_nothing(self):
        engine = AccessDecisionEngine(RuleSetRegistry({ResourceType.DOCUMENT: []}))
        context = make_context(user_role=UserRole.ADMIN)
        assert engine.get_user_access_level(context, ResourceType.DOCUMENT) == AccessLevel.NONE
