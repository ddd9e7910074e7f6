import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from solarops.core.security import create_access_token, get_password_hash
from solarops.db.session import get_db, init_db
from solarops.main import app
from solarops.models import ProjectAssignment, User, UserRole


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def client(session):
    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def make_user(session):
    def _make_user(email, roles=None, password="secret123", full_name=None):
        user = User(
            email=email,
            password=get_password_hash(password),
            full_name=full_name or email.split("@")[0],
            roles=roles or [UserRole.USER],
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def assign(session):
    def _assign(email, states=(), modules=(), region_access=None, name="Field Staff"):
        assignment = ProjectAssignment(
            assignee_email=email,
            assignee_name=name,
            assigned_states=list(states),
            module_access=list(modules),
            region_access=dict(region_access or {}),
        )
        session.add(assignment)
        session.commit()
        return assignment

    return _assign


def headers_for(user):
    return {"Authorization": f"Bearer {create_access_token(user.email)}"}


@pytest.fixture()
def admin_headers(make_user):
    return headers_for(make_user("admin@solarops.in", roles=[UserRole.ADMIN]))


@pytest.fixture()
def auth_headers():
    return headers_for
