import pytest
from fastapi.testclient import TestClient

from rth_backend.fastapi.core.config import DevSettings
from rth_backend.fastapi.core.retry import RetryPolicy, linear_backoff
from rth_backend.fastapi.crud.admin import create_admin
from rth_backend.fastapi.dependencies.database import Database
from rth_backend.fastapi.main import create_app
from rth_backend.security.dependencies import get_retry_policy
from rth_backend.security.password import pwd_context

TEST_SECRET = "test-secret-key-for-testing-only"
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correctpw"


class FakeSleep:
    """Records requested delays instead of sleeping."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


@pytest.fixture(scope="session", autouse=True)
def fast_password_hashing():
    # Minimum bcrypt cost keeps the suite fast
    pwd_context.update(bcrypt__rounds=4)
    yield


def make_settings(**overrides):
    values = {
        "ENV_MODE": "dev",
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": TEST_SECRET,
        "INITIAL_ADMIN_PASSWORD": "",
    }
    values.update(overrides)
    return DevSettings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def app(settings, fake_sleep):
    app = create_app(settings)
    app.dependency_overrides[get_retry_policy] = lambda: RetryPolicy(
        max_attempts=3,
        backoff=linear_backoff(1.0),
        sleep=fake_sleep,
    )
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def database(client):
    """The application's database, available once the app has started."""
    return client.app.state.database


@pytest.fixture
def admin(database):
    with database.session() as db:
        return create_admin(db, ADMIN_USERNAME, ADMIN_PASSWORD, email="admin@bandung.go.id")


@pytest.fixture
def token(client, admin):
    resp = client.post(
        "/api/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert resp.status_code == 200
    return resp.json()["data"]["token"]


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def standalone_db():
    """A fresh in-memory database outside any app, for store-level tests."""
    database = Database("sqlite://")
    database.create_all()
    db = database.session()
    try:
        yield db
    finally:
        db.close()
        database.dispose()
