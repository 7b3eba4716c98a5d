from enum import Enum


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    VOLUNTEER = "VOLUNTEER"
    MEMBER = "MEMBER"


class FamilyRole(str, Enum):
    PRIMARY_CONTACT = "PRIMARY_CONTACT"
    FAMILY_ADMIN = "FAMILY_ADMIN"
    MEMBER = "MEMBER"


class ResourceVisibility(str, Enum):
    PRIVATE = "PRIVATE"
    FAMILY = "FAMILY"
    SHARED = "SHARED"
    PUBLIC = "PUBLIC"


class ResourceStatus(str, Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"
