"""Shared fixtures: in-memory SQLite database, users, project, task and API client."""

import os
from pathlib import Path
from uuid import uuid4

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Test settings override the developer's .env
backend_dir = Path(__file__).parent.parent
test_env_file = backend_dir / ".env.test"
if test_env_file.exists():
    load_dotenv(test_env_file, override=True)
os.environ.setdefault("DATABASE_URL", "sqlite://")

from app.core.auth import create_access_token  # noqa: E402
from app.core.config_file import get_settings  # noqa: E402
from app.core.db.deps import get_db  # noqa: E402
from app.core.db.session import Base  # noqa: E402
from app.main import app  # noqa: E402
from app.models.project import Project, Section  # noqa: E402
from app.models.task import Task  # noqa: E402
from app.models.user import User  # noqa: E402

get_settings.cache_clear()

TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Provide a session on a freshly created schema for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def test_user(db_session):
    """Create test user."""
    user = User(id=uuid4(), email="owner@example.com", name="Olivia Owner", is_active=True)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def other_user(db_session):
    """Create a second user."""
    user = User(id=uuid4(), email="member@example.com", name="Max Member", is_active=True)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def test_project(db_session, test_user):
    """Create a project owned by test_user with a single section."""
    project = Project(id=uuid4(), name="Launch", owner_id=test_user.id)
    project.sections.append(Section(id=uuid4(), name="To Do", position=0))
    db_session.add(project)
    db_session.commit()
    db_session.refresh(project)
    return project


@pytest.fixture
def test_task(db_session, test_project):
    """Create an unassigned task in test_project."""
    task = Task(
        id=uuid4(),
        title="Write release notes",
        project_id=test_project.id,
        section_id=test_project.sections[0].id,
    )
    db_session.add(task)
    db_session.commit()
    db_session.refresh(task)
    return task


@pytest.fixture
def client(db_session):
    """Create test client using the test database session."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_auth_headers(user: User) -> dict[str, str]:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(test_user):
    """Authorization headers for test_user."""
    return make_auth_headers(test_user)


@pytest.fixture
def other_auth_headers(other_user):
    """Authorization headers for other_user."""
    return make_auth_headers(other_user)
