from typing import Optional
from sqlalchemy import false
from sqlalchemy.orm import Session, Query

from famcare_backend.model.enums import UserRole
from famcare_backend.model.resource import Resource
from famcare_backend.permissions.visibility import build_visibility_predicate, compile_predicate


class ResourceVisibilityQueryBuilder:
    """Utility class for building visibility filtered resource queries"""

    @classmethod
    def visibility_clause(cls, user_id: str, user_role: UserRole, family_id: Optional[str] = None):
        """SQL clause equivalent to ResourceVisibilityGate.check_resource_access for each row"""
        return compile_predicate(build_visibility_predicate(user_id, user_role, family_id))

    @classmethod
    def filter_visible_resources(cls, query: Query, user_id: str, user_role: UserRole,
                                 family_id: Optional[str] = None) -> Query:
        """Restrict a resource query to the rows visible to the user"""
        return query.filter(cls.visibility_clause(user_id, user_role, family_id))

    @classmethod
    def build_visible_resources_query(cls, db: Session, user_id: str, user_role: UserRole,
                                      family_id: Optional[str] = None,
                                      include_deleted: bool = False) -> Query:
        """Build a query of all resources visible to the user"""
        query = db.query(Resource)

        if not include_deleted:
            query = query.filter(Resource.is_deleted == false())

        return cls.filter_visible_resources(query, user_id, user_role, family_id).order_by(Resource.created_at.desc())
