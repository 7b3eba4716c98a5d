from enum import Enum
from typing import Dict

from famcare_backend.permissions.levels import AccessLevel


class Operation(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


OPERATION_LEVELS: Dict[Operation, AccessLevel] = {
    Operation.CREATE: AccessLevel.WRITE,
    Operation.UPDATE: AccessLevel.WRITE,
    Operation.DELETE: AccessLevel.DELETE,
    Operation.READ: AccessLevel.READ,
}

_unmapped = set(Operation) - set(OPERATION_LEVELS)
if _unmapped:
    raise RuntimeError(f"Operations without a required access level: {sorted(o.value for o in _unmapped)}")


def required_level_for_operation(operation: Operation | str) -> AccessLevel:
    """Required access level for a CRUD operation. Unknown operation names raise ValueError."""
    return OPERATION_LEVELS[Operation(operation)]
