"""Shared builders for tests: isolated SQLite databases, seeded users, API clients."""

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from vehiclevault.core.config import Settings
from vehiclevault.core.database import get_db
from vehiclevault.main import app
from vehiclevault.models import Base
from vehiclevault.schemas.auth import Profile, UserStatus
from vehiclevault.schemas.users import UserCreate, UserOut
from vehiclevault.services.credential_store import UserStore
from vehiclevault.services.users import add_user


def make_settings(**overrides: object) -> Settings:
    """Settings for a test, independent of the cached process settings."""
    values: dict[str, object] = {
        "DATABASE_URL": "sqlite://",
        "BCRYPT_ROUNDS": 4,
        "SESSION_SECRET": "test-session-secret",
    }
    values.update(overrides)
    return Settings(**values)


def make_session_factory() -> sessionmaker[Session]:
    """Fresh in-memory database with all tables; one per test case."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def seed_user(
    factory: sessionmaker[Session],
    email: str = "tech@x.com",
    password: str = "secret1",
    profile: Profile = Profile.TECHNICIAN,
    status: UserStatus = UserStatus.ACTIVE,
    full_name: str = "Test User",
    is_protected: bool = False,
) -> UserOut:
    db = factory()
    try:
        return add_user(
            UserStore(db),
            UserCreate(
                full_name=full_name,
                email=email,
                password=password,
                profile=profile,
                status=status,
            ),
            make_settings(),
            is_protected=is_protected,
        )
    finally:
        db.close()


def make_client(factory: sessionmaker[Session]) -> TestClient:
    """TestClient whose requests use ``factory``. Call app.dependency_overrides.clear() in tearDown."""

    def _get_db():
        db = factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    return TestClient(app)


def login(client: TestClient, email: str, password: str):
    return client.post("/api/v1/auth/login", json={"email": email, "password": password})
