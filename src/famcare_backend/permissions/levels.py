from enum import Enum
from typing import Iterable


class AccessLevel(str, Enum):
    """Ordinal permission tier: NONE < READ < WRITE < DELETE < ADMIN"""

    NONE = "none"
    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    ADMIN = "admin"

    @property
    def rank(self) -> int:
        return _LEVEL_HIERARCHY[self]

    def is_sufficient_for(self, required: "AccessLevel") -> bool:
        """Check if this level satisfies the required level"""
        return self.rank >= required.rank

    def is_higher_than(self, other: "AccessLevel") -> bool:
        return self.rank > other.rank


_LEVEL_HIERARCHY = {
    AccessLevel.NONE: 0,
    AccessLevel.READ: 1,
    AccessLevel.WRITE: 2,
    AccessLevel.DELETE: 3,
    AccessLevel.ADMIN: 4,
}


def is_access_level_sufficient(user_level: AccessLevel, required_level: AccessLevel) -> bool:
    return user_level.is_sufficient_for(required_level)


def highest_access_level(levels: Iterable[AccessLevel]) -> AccessLevel:
    """Return the highest level of the given levels, NONE for an empty iterable"""
    highest = AccessLevel.NONE
    for level in levels:
        if level.is_higher_than(highest):
            highest = level
    return highest
