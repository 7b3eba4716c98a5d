from typing import Optional, Protocol
from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from famcare_backend.api.exceptions import NotFoundException
from famcare_backend.model.auth import User
from famcare_backend.model.resource import Resource, ResourceShare, TemplateAssignment
from famcare_backend.permissions.context import AccessUser


class AccessStore(Protocol):
    """Read-only lookups the visibility gate needs from the surrounding application"""

    def share_exists(self, resource_id: str, user_id: str) -> bool: ...

    def assignment_exists(self, resource_id: str, user_id: str) -> bool: ...

    def get_user(self, user_id: str) -> Optional[AccessUser]: ...


class SqlAccessStore:
    """AccessStore backed by the application database"""

    def __init__(self, db: Session):
        self.db = db

    def share_exists(self, resource_id: str, user_id: str) -> bool:
        return bool(self.db.scalar(
            select(exists().where(
                ResourceShare.resource_id == resource_id,
                ResourceShare.user_id == user_id,
            ))
        ))

    def assignment_exists(self, resource_id: str, user_id: str) -> bool:
        return bool(self.db.scalar(
            select(exists().where(
                TemplateAssignment.resource_id == resource_id,
                TemplateAssignment.assignee_id == user_id,
            ))
        ))

    def get_user(self, user_id: str) -> Optional[AccessUser]:
        user = self.db.get(User, user_id)
        if user is None:
            return None
        return AccessUser.model_validate(user)

    def get_user_or_throw(self, user_id: str) -> AccessUser:
        user = self.get_user(user_id)
        if user is None:
            raise NotFoundException(detail={"user_id": user_id})
        return user

    def get_resource(self, resource_id: str) -> Optional[Resource]:
        return self.db.get(Resource, resource_id)
