"""
Access conditions.

A condition is a small, acyclic expression tree over the facts of an AccessContext.
Trees are always assembled in code through the helper constructors below; they are
never parsed from request data.
"""

from typing import Annotated, List, Literal, Union
from pydantic import BaseModel, ConfigDict, Field


class _Condition(BaseModel):
    model_config = ConfigDict(frozen=True)


class IsAdmin(_Condition):
    kind: Literal["is_admin"] = "is_admin"


class IsOwner(_Condition):
    kind: Literal["is_owner"] = "is_owner"


class IsFamilyMember(_Condition):
    kind: Literal["is_family_member"] = "is_family_member"


class IsFamilyAdmin(_Condition):
    # Only looks at the family role, not at which family the resource belongs to.
    # Combine with IsFamilyMember to scope it to the user's own family.
    kind: Literal["is_family_admin"] = "is_family_admin"


class IsPublic(_Condition):
    kind: Literal["is_public"] = "is_public"


class IsSystemResource(_Condition):
    kind: Literal["is_system_resource"] = "is_system_resource"


class AllOf(_Condition):
    kind: Literal["all_of"] = "all_of"
    conditions: List["AccessCondition"] = Field(default_factory=list)


class AnyOf(_Condition):
    kind: Literal["any_of"] = "any_of"
    conditions: List["AccessCondition"] = Field(default_factory=list)


class Negate(_Condition):
    kind: Literal["negate"] = "negate"
    condition: "AccessCondition"


AccessCondition = Annotated[
    Union[
        IsAdmin,
        IsOwner,
        IsFamilyMember,
        IsFamilyAdmin,
        IsPublic,
        IsSystemResource,
        AllOf,
        AnyOf,
        Negate,
    ],
    Field(discriminator="kind"),
]

AllOf.model_rebuild()
AnyOf.model_rebuild()
Negate.model_rebuild()


# Helper constructors

def is_admin() -> IsAdmin:
    return IsAdmin()

def is_owner() -> IsOwner:
    return IsOwner()

def is_family_member() -> IsFamilyMember:
    return IsFamilyMember()

def is_family_admin() -> IsFamilyAdmin:
    return IsFamilyAdmin()

def is_public() -> IsPublic:
    return IsPublic()

def is_system_resource() -> IsSystemResource:
    return IsSystemResource()

def all_of(*conditions: AccessCondition) -> AllOf:
    return AllOf(conditions=list(conditions))

def any_of(*conditions: AccessCondition) -> AnyOf:
    return AnyOf(conditions=list(conditions))

def negate(condition: AccessCondition) -> Negate:
    return Negate(condition=condition)


def describe_condition(condition) -> str:
    """Render a condition tree as a compact, human readable expression"""
    if isinstance(condition, AllOf):
        return "all_of(" + ", ".join(describe_condition(c) for c in condition.conditions) + ")"
    if isinstance(condition, AnyOf):
        return "any_of(" + ", ".join(describe_condition(c) for c in condition.conditions) + ")"
    if isinstance(condition, Negate):
        return f"negate({describe_condition(condition.condition)})"
    return getattr(condition, "kind", type(condition).__name__)
