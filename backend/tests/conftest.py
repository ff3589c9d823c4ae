"""
Shared pytest fixtures for LiftLens backend tests.

This module provides common fixtures for:
- Database sessions
- Test users and authentication
- FastAPI test client with fake model and image collaborators
- Factory fixtures for locations and model responses
"""
import os
import pytest
from typing import Callable, Dict, Generator, List, Optional

# Set test environment variables BEFORE importing app modules
# This ensures Settings loads in debug/test mode
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from backend.api.dependencies import get_image_source, get_language_model
from backend.auth.jwt import create_access_token
from backend.auth.utils import hash_password
from backend.db.database import Base, get_db
from backend.db.models import User, Location
from backend.models.schemas import UserRole
from backend.main import app
from backend.tests.fakes import FakeImageSource, FakeLanguageModel


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite database for testing.

    Each test function gets a fresh database.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create a database session for testing."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def fake_model() -> FakeLanguageModel:
    """Fake language model injected into the app by the client fixture."""
    return FakeLanguageModel()


@pytest.fixture
def fake_images() -> FakeImageSource:
    """Fake image source injected into the app by the client fixture."""
    return FakeImageSource()


@pytest.fixture(scope="function")
def client(db_session, fake_model, fake_images) -> Generator[TestClient, None, None]:
    """Create FastAPI test client with database and collaborator overrides."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_language_model] = lambda: fake_model
    app.dependency_overrides[get_image_source] = lambda: fake_images

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================================================
# User Fixtures
# ============================================================================

def _create_user(db_session, email: str, is_active: bool = True) -> User:
    user = User(
        email=email,
        hashed_password=hash_password("testpassword123"),
        full_name="Test User",
        role=UserRole.USER,
        is_active=is_active,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def test_user(db_session) -> User:
    """Create a standard test user (password: testpassword123)."""
    return _create_user(db_session, "test@example.com")


@pytest.fixture
def other_user(db_session) -> User:
    """Create a second user who owns nothing of test_user's."""
    return _create_user(db_session, "other@example.com")


@pytest.fixture
def inactive_user(db_session) -> User:
    """Create an inactive test user."""
    return _create_user(db_session, "inactive@example.com", is_active=False)


# ============================================================================
# Authentication Fixtures
# ============================================================================

@pytest.fixture
def auth_headers(test_user) -> Dict[str, str]:
    """Authorization headers for test_user."""
    token = create_access_token(user_id=test_user.id, role=test_user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(other_user) -> Dict[str, str]:
    """Authorization headers for other_user."""
    token = create_access_token(user_id=other_user.id, role=other_user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def inactive_auth_headers(inactive_user) -> Dict[str, str]:
    """Authorization headers for the inactive user."""
    token = create_access_token(user_id=inactive_user.id, role=inactive_user.role.value)
    return {"Authorization": f"Bearer {token}"}


# ============================================================================
# Location Fixtures
# ============================================================================

@pytest.fixture
def make_location(db_session, test_user) -> Callable[..., Location]:
    """Factory for locations owned by test_user."""
    def _make(
        photo_urls: Optional[List[str]] = None,
        equipment: Optional[List[str]] = None,
        name: str = "Home Gym",
        owner: Optional[User] = None,
    ) -> Location:
        location = Location(
            user_id=(owner or test_user).id,
            name=name,
            photo_urls=list(photo_urls or []),
            equipment=list(equipment or []),
        )
        db_session.add(location)
        db_session.commit()
        db_session.refresh(location)
        return location

    return _make


@pytest.fixture
def location_with_photos(make_location) -> Location:
    """A location with two photos and no stored equipment."""
    return make_location(
        photo_urls=[
            "https://cdn.example.com/photos/rack.jpg",
            "https://cdn.example.com/photos/cardio.jpg",
        ]
    )


@pytest.fixture
def empty_location(make_location) -> Location:
    """A location without photos."""
    return make_location(name="Empty Studio")


# ============================================================================
# Model Response Fixtures
# ============================================================================

@pytest.fixture
def structured_routine_text() -> str:
    """A routine answer that follows the TITLE:/DESCRIPTION:/OUTLINE: cues."""
    return (
        "TITLE: Three-Day Strength Builder\n"
        "DESCRIPTION: A full-body program built around compound lifts.\n"
        "Suitable for intermediate lifters.\n"
        "OUTLINE:\n"
        "## Day 1: Lower Body\n"
        "- Back Squat: 5 x 5\n"
        "- Romanian Deadlift: 3 x 8\n"
        "\n"
        "## Day 2: Upper Body\n"
        "- Bench Press: 5 x 5\n"
        "- Barbell Row: 3 x 8\n"
    )


@pytest.fixture
def markdown_routine_text() -> str:
    """A routine answer written as a plain markdown document."""
    return (
        "# Dumbbell Hypertrophy Split\n"
        "DESCRIPTION: Two upper/lower sessions using only dumbbells.\n"
        "OUTLINE:\n"
        "## Day 1\n"
        "### Main Workout\n"
        "- Goblet Squat: 3 x 12\n"
        "## Day 2\n"
        "- Dumbbell Press: 3 x 10\n"
    )
