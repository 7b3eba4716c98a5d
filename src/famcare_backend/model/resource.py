from sqlalchemy import (
    Boolean, Column, DateTime, Enum, ForeignKey,
    Index, String, Text, UniqueConstraint, false, func
)
from sqlalchemy.orm import relationship

from .auth import _uuid
from .base import Base
from .enums import ResourceStatus, ResourceVisibility


class Resource(Base):
    __tablename__ = 'resource'
    __table_args__ = (
        Index('resource_family_visibility_idx', 'family_id', 'visibility'),
        Index('resource_created_by_idx', 'created_by'),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(True), nullable=False, server_default=func.now(), onupdate=func.now())
    created_by = Column(ForeignKey('user.id', ondelete='CASCADE'), nullable=False)
    family_id = Column(ForeignKey('family.id', ondelete='SET NULL'))
    visibility = Column(Enum(ResourceVisibility, name='resource_visibility'), nullable=False, default=ResourceVisibility.PRIVATE)
    status = Column(Enum(ResourceStatus, name='resource_status'), nullable=False, default=ResourceStatus.ACTIVE)
    is_system_generated = Column(Boolean, nullable=False, default=False, server_default=false())
    is_deleted = Column(Boolean, nullable=False, default=False, server_default=false())

    # Relationships
    creator = relationship('User', foreign_keys=[created_by])
    family = relationship('Family', back_populates='resources')
    shares = relationship('ResourceShare', back_populates='resource', cascade='all, delete-orphan')
    template_assignments = relationship('TemplateAssignment', back_populates='resource', cascade='all, delete-orphan')


class ResourceShare(Base):
    __tablename__ = 'resource_share'
    __table_args__ = (
        UniqueConstraint('resource_id', 'user_id', name='resource_share_resource_user_key'),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    resource_id = Column(ForeignKey('resource.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(ForeignKey('user.id', ondelete='CASCADE'), nullable=False)

    resource = relationship('Resource', back_populates='shares')
    user = relationship('User')


class TemplateAssignment(Base):
    __tablename__ = 'template_assignment'
    __table_args__ = (
        UniqueConstraint('resource_id', 'assignee_id', name='template_assignment_resource_assignee_key'),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    resource_id = Column(ForeignKey('resource.id', ondelete='CASCADE'), nullable=False)
    assignee_id = Column(ForeignKey('user.id', ondelete='CASCADE'), nullable=False)
    assigned_by = Column(ForeignKey('user.id', ondelete='SET NULL'))

    resource = relationship('Resource', back_populates='template_assignments')
    assignee = relationship('User', foreign_keys=[assignee_id])
