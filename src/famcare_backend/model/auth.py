import uuid
from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, func
from sqlalchemy.orm import relationship

from .base import Base
from .enums import FamilyRole, UserRole


def _uuid() -> str:
    return str(uuid.uuid4())


class Family(Base):
    __tablename__ = 'family'

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(True), nullable=False, server_default=func.now(), onupdate=func.now())
    created_by = Column(String(36))

    # Relationships
    members = relationship('User', back_populates='family')
    resources = relationship('Resource', back_populates='family')


class User(Base):
    __tablename__ = 'user'

    id = Column(String(36), primary_key=True, default=_uuid)
    email = Column(String(320), unique=True)
    given_name = Column(String(255))
    family_name = Column(String(255))
    role = Column(Enum(UserRole, name='user_role'), nullable=False, default=UserRole.MEMBER)
    family_id = Column(ForeignKey('family.id', ondelete='SET NULL'))
    family_role = Column(Enum(FamilyRole, name='family_role'))
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    family = relationship('Family', back_populates='members')
