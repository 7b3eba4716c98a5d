"""
Resource visibility predicate.

Who may see which resource instance is described once, as a predicate tree built by
build_visibility_predicate. The same tree is

- interpreted in-process by evaluate_predicate for a single resource, and
- compiled by compile_predicate into a SQLAlchemy clause for list queries,

so a row is returned by a filtered query exactly when the single-item check admits it.
Any new exception to the visibility rules belongs in build_visibility_predicate and
nowhere else.
"""

import logging
from typing import Annotated, Any, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import and_, exists, false, not_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from famcare_backend.model.enums import ResourceVisibility, UserRole
from famcare_backend.model.resource import Resource, ResourceShare, TemplateAssignment
from famcare_backend.permissions.context import get_attribute
from famcare_backend.permissions.store import AccessStore

logger = logging.getLogger(__name__)


class _Predicate(BaseModel):
    model_config = ConfigDict(frozen=True)


class Always(_Predicate):
    kind: Literal["always"] = "always"


class Never(_Predicate):
    kind: Literal["never"] = "never"


class CreatedBy(_Predicate):
    kind: Literal["created_by"] = "created_by"
    user_id: str


class VisibilityIs(_Predicate):
    kind: Literal["visibility_is"] = "visibility_is"
    visibility: ResourceVisibility


class FamilyIs(_Predicate):
    kind: Literal["family_is"] = "family_is"
    family_id: str


class SharedWith(_Predicate):
    kind: Literal["shared_with"] = "shared_with"
    user_id: str


class AssignedTo(_Predicate):
    kind: Literal["assigned_to"] = "assigned_to"
    user_id: str


class SystemGenerated(_Predicate):
    kind: Literal["system_generated"] = "system_generated"


class And(_Predicate):
    kind: Literal["and"] = "and"
    predicates: List["VisibilityPredicate"] = Field(default_factory=list)


class Or(_Predicate):
    kind: Literal["or"] = "or"
    predicates: List["VisibilityPredicate"] = Field(default_factory=list)


class Not(_Predicate):
    kind: Literal["not"] = "not"
    predicate: "VisibilityPredicate"


VisibilityPredicate = Annotated[
    Union[
        Always, Never, CreatedBy, VisibilityIs, FamilyIs,
        SharedWith, AssignedTo, SystemGenerated, And, Or, Not,
    ],
    Field(discriminator="kind"),
]

And.model_rebuild()
Or.model_rebuild()
Not.model_rebuild()


def build_visibility_predicate(user_id: str, user_role: UserRole,
                               family_id: Optional[str] = None) -> VisibilityPredicate:
    """
    Build the predicate deciding which resources a user may see.

    Precedence:
        1. ADMIN sees everything.
        2. Creators always see their own resources.
        3. A MEMBER sees a system generated resource only through a template
           assignment, whatever its visibility.
        4. Otherwise visibility decides: PUBLIC for everyone, FAMILY within the
           resource's family, SHARED for users it was shared with, PRIVATE for nobody.

    VOLUNTEERs are not subject to rule 3 and see system generated resources under
    the normal visibility rules.
    """
    if user_role == UserRole.ADMIN:
        return Always()

    same_family = FamilyIs(family_id=family_id) if family_id else Never()

    visible = Or(predicates=[
        VisibilityIs(visibility=ResourceVisibility.PUBLIC),
        And(predicates=[VisibilityIs(visibility=ResourceVisibility.FAMILY), same_family]),
        And(predicates=[VisibilityIs(visibility=ResourceVisibility.SHARED), SharedWith(user_id=user_id)]),
    ])

    if user_role == UserRole.MEMBER:
        return Or(predicates=[
            CreatedBy(user_id=user_id),
            And(predicates=[SystemGenerated(), AssignedTo(user_id=user_id)]),
            And(predicates=[Not(predicate=SystemGenerated()), visible]),
        ])

    return Or(predicates=[CreatedBy(user_id=user_id), visible])


def evaluate_predicate(predicate: Any, resource: Any, store: AccessStore) -> bool:
    """Decide a predicate for a single resource; share and assignment lookups go through the store"""
    if isinstance(predicate, Always):
        return True

    if isinstance(predicate, Never):
        return False

    if isinstance(predicate, CreatedBy):
        return get_attribute(resource, "created_by") == predicate.user_id

    if isinstance(predicate, VisibilityIs):
        return get_attribute(resource, "visibility") == predicate.visibility

    if isinstance(predicate, FamilyIs):
        family_id = get_attribute(resource, "family_id")
        return bool(family_id) and family_id == predicate.family_id

    if isinstance(predicate, SharedWith):
        return store.share_exists(str(get_attribute(resource, "id")), predicate.user_id)

    if isinstance(predicate, AssignedTo):
        return store.assignment_exists(str(get_attribute(resource, "id")), predicate.user_id)

    if isinstance(predicate, SystemGenerated):
        return bool(get_attribute(resource, "is_system_generated"))

    if isinstance(predicate, And):
        return all(evaluate_predicate(p, resource, store) for p in predicate.predicates)

    if isinstance(predicate, Or):
        return any(evaluate_predicate(p, resource, store) for p in predicate.predicates)

    if isinstance(predicate, Not):
        return not evaluate_predicate(predicate.predicate, resource, store)

    logger.warning(f"Unknown visibility predicate {predicate!r}, treating as not satisfied")
    return False


def compile_predicate(predicate: Any) -> ColumnElement[bool]:
    """Compile a predicate into a boolean SQL clause over the resource table"""
    if isinstance(predicate, Always):
        return true()

    if isinstance(predicate, Never):
        return false()

    if isinstance(predicate, CreatedBy):
        return Resource.created_by == predicate.user_id

    if isinstance(predicate, VisibilityIs):
        return Resource.visibility == predicate.visibility

    if isinstance(predicate, FamilyIs):
        return and_(Resource.family_id.is_not(None), Resource.family_id == predicate.family_id)

    if isinstance(predicate, SharedWith):
        return exists().where(
            ResourceShare.resource_id == Resource.id,
            ResourceShare.user_id == predicate.user_id,
        )

    if isinstance(predicate, AssignedTo):
        return exists().where(
            TemplateAssignment.resource_id == Resource.id,
            TemplateAssignment.assignee_id == predicate.user_id,
        )

    if isinstance(predicate, SystemGenerated):
        return Resource.is_system_generated == true()

    if isinstance(predicate, And):
        if not predicate.predicates:
            return true()
        return and_(*[compile_predicate(p) for p in predicate.predicates])

    if isinstance(predicate, Or):
        if not predicate.predicates:
            return false()
        return or_(*[compile_predicate(p) for p in predicate.predicates])

    if isinstance(predicate, Not):
        return not_(compile_predicate(predicate.predicate))

    logger.warning(f"Unknown visibility predicate {predicate!r}, compiling to FALSE")
    return false()
