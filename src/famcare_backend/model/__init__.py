from .base import Base, metadata
from .enums import UserRole, FamilyRole, ResourceVisibility, ResourceStatus
from .auth import User, Family
from .resource import Resource, ResourceShare, TemplateAssignment

__all__ = [
    'Base',
    'metadata',
    # Enums
    'UserRole',
    'FamilyRole',
    'ResourceVisibility',
    'ResourceStatus',
    # Auth models
    'User',
    'Family',
    # Resource models
    'Resource',
    'ResourceShare',
    'TemplateAssignment',
]
