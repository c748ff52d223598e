"""
Shared fixtures for the Lunchbox API tests.

The app runs against an in-memory SQLite database (recreated per test) and
a fake identity provider that maps bearer tokens to principals.
"""

import os

# Must be set before settings are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENV"] = "testing"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["MASTER_ADMIN_EMAILS"] = "Boss@Example.com, chef-lead@example.com"
os.environ["IDENTITY_JWT_SECRET"] = "test-secret"
os.environ["SESSION_COOKIE_NAME"] = "sb-access-token"
os.environ.pop("SENTRY_DSN", None)

import pytest
from fastapi.testclient import TestClient

from main import app
from app.database import Base, get_engine, get_session_factory
from app.models import MenuItem, Profile
from app.services.identity import IdentityProvider, Principal, get_identity_provider

LOCATION = "loc-hq"


class FakeIdentityProvider(IdentityProvider):
    """Token → principal lookup with no network or signing."""

    def __init__(self):
        super().__init__()
        self.tokens = {}
        self.users = []

    def register(self, token: str, principal: Principal) -> None:
        self.tokens[token] = principal
        if principal not in self.users:
            self.users.append(principal)

    async def get_user(self, token: str):
        return self.tokens.get(token)

    async def list_users(self, page: int = 1, per_page: int = 200):
        return list(self.users)


@pytest.fixture(autouse=True)
def database():
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(database):
    session = get_session_factory()()
    yield session
    session.close()


@pytest.fixture
def identity():
    fake = FakeIdentityProvider()
    app.dependency_overrides[get_identity_provider] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_identity_provider, None)


@pytest.fixture
def client(identity):
    return TestClient(app)


@pytest.fixture
def login(identity, db):
    """
    Register a principal and return bearer headers for it.

    Passing ``role``, ``name`` or ``lunch_session`` also stores a profile row.
    """

    def _login(user_id, email=None, role=None, name=None, lunch_session=None):
        token = f"token-{user_id}"
        identity.register(token, Principal(id=user_id, email=email or f"{user_id}@example.com"))
        if role or name or lunch_session:
            db.merge(Profile(
                id=user_id,
                role=role or "staff",
                name=name,
                lunch_session=lunch_session,
            ))
            db.commit()
        return {"Authorization": f"Bearer {token}"}

    return _login


@pytest.fixture
def staff_headers(login):
    return login("staff-1", role="staff", name="Sam Staff")


@pytest.fixture
def catering_headers(login):
    return login("cater-1", role="catering", name="Casey Cook")


@pytest.fixture
def admin_headers(login):
    return login("admin-1", role="admin", name="Alex Admin")


@pytest.fixture
def menu(db):
    """A small catalog: two hot dishes and one of each cold slot."""
    items = {
        "curry": MenuItem(name="Chicken curry", category="hot"),
        "lasagne": MenuItem(name="Lasagne", category="hot"),
        "wrap": MenuItem(name="Falafel wrap", category="cold_main"),
        "salad": MenuItem(name="Side salad", category="cold_side"),
        "fruit": MenuItem(name="Fruit pot", category="cold_extra"),
    }
    db.add_all(items.values())
    db.commit()
    return {key: item.id for key, item in items.items()}
