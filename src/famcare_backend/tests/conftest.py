"""
Pytest configuration and fixtures for all tests.
"""

import os
import sys
import itertools
import pytest
from unittest.mock import MagicMock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure famcare_backend is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from famcare_backend.model import (
    Base, Family, FamilyRole, Resource, ResourceShare, ResourceVisibility,
    TemplateAssignment, User, UserRole
)
from famcare_backend.permissions.context import AccessContext
from famcare_backend.permissions.engine import AccessDecisionEngine
from famcare_backend.permissions.rules import default_registry


def make_store(shares=(), assignments=(), users=None):
    """Create a MagicMock AccessStore answering from in-memory tuples."""
    store = MagicMock()
    store.share_exists.side_effect = lambda resource_id, user_id: (resource_id, user_id) in set(shares)
    store.assignment_exists.side_effect = lambda resource_id, user_id: (resource_id, user_id) in set(assignments)
    store.get_user.side_effect = lambda user_id: (users or {}).get(user_id)
    return store


def make_context(**overrides) -> AccessContext:
    values = {"user_id": "u1", "user_role": UserRole.MEMBER}
    values.update(overrides)
    return AccessContext(**values)


@pytest.fixture
def engine():
    """Decision engine over the default rule tables."""
    return AccessDecisionEngine(default_registry())


@pytest.fixture
def db_engine():
    """In-memory SQLite engine shared by all connections of a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session(db_engine):
    """Create a new database session for a test."""
    session = sessionmaker(bind=db_engine)()
    try:
        yield session
    finally:
        session.close()


SEED_USERS = [
    # id, role, family_id, family_role
    ("admin", UserRole.ADMIN, None, None),
    ("volunteer", UserRole.VOLUNTEER, None, None),
    ("volunteer-f1", UserRole.VOLUNTEER, "F1", None),
    ("member-f1-admin", UserRole.MEMBER, "F1", FamilyRole.FAMILY_ADMIN),
    ("member-f1", UserRole.MEMBER, "F1", FamilyRole.MEMBER),
    ("member-f2", UserRole.MEMBER, "F2", FamilyRole.PRIMARY_CONTACT),
    ("member-alone", UserRole.MEMBER, None, None),
]


@pytest.fixture
def seeded_session(session):
    """
    Session seeded with every combination of creator, family, visibility and
    system generated flag, plus a spread of shares and template assignments.
    """
    session.add_all([Family(id="F1", name="Family One"), Family(id="F2", name="Family Two")])
    session.add_all([
        User(id=user_id, email=f"{user_id}@example.org", role=role, family_id=family_id, family_role=family_role)
        for user_id, role, family_id, family_role in SEED_USERS
    ])
    session.flush()

    creators = ["admin", "volunteer", "member-f1-admin", "member-f2"]
    families = [None, "F1", "F2"]
    combinations = itertools.product(creators, families, list(ResourceVisibility), [False, True])

    for index, (creator, family_id, visibility, system_generated) in enumerate(combinations):
        resource_id = f"r{index:03d}"
        session.add(Resource(
            id=resource_id,
            title=f"Resource {index}",
            created_by=creator,
            family_id=family_id,
            visibility=visibility,
            is_system_generated=system_generated,
        ))
        if index % 2 == 0:
            session.add(ResourceShare(resource_id=resource_id, user_id="member-f1"))
            session.add(ResourceShare(resource_id=resource_id, user_id="volunteer"))
        if index % 3 == 0:
            session.add(TemplateAssignment(resource_id=resource_id, assignee_id="member-f1", assigned_by="admin"))
            session.add(TemplateAssignment(resource_id=resource_id, assignee_id="member-alone", assigned_by="admin"))

    session.add(Resource(
        id="deleted", title="Deleted", created_by="member-f1",
        visibility=ResourceVisibility.PUBLIC, is_deleted=True,
    ))
    session.commit()
    return session
