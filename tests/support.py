from fastapi.testclient import TestClient

from inventory_tracker.config import Settings, get_settings
from inventory_tracker.database import build_engine, get_db, init_db, session_factory
from inventory_tracker.main import app

TEST_SECRET = "unit-test-signing-secret"
FAST_ROUNDS = 1_000


def make_settings(**overrides) -> Settings:
    values = {
        "JWT_SECRET": TEST_SECRET,
        "PASSWORD_PBKDF2_ROUNDS": FAST_ROUNDS,
        "ENVIRONMENT": "test",
    }
    values.update(overrides)
    return Settings(**values)


def make_session_factory():
    engine = build_engine("sqlite:///:memory:")
    init_db(bind=engine)
    return engine, session_factory(engine)


def item_fields(**overrides) -> dict:
    fields = {
        "inventory_id": "INV1",
        "product_name": "Mouse",
        "category": "Accessories",
        "supplier": "Acme",
        "cost_unit": 20,
        "warehouse": "W1",
    }
    fields.update(overrides)
    return fields


def item_payload(**overrides) -> dict:
    payload = {
        "inventoryId": "INV1",
        "productName": "Mouse",
        "category": "Accessories",
        "supplier": "Acme",
        "costUnit": 20,
        "warehouse": "W1",
    }
    payload.update(overrides)
    return payload


class ApiHarness:
    """Wires the app to a private in-memory database and test settings."""

    def __init__(self, settings: Settings | None = None):
        self.engine, self.session_factory = make_session_factory()
        self.settings = settings or make_settings()

        def _get_db():
            db = self.session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = _get_db
        app.dependency_overrides[get_settings] = lambda: self.settings
        self.client = TestClient(app)

    def close(self):
        app.dependency_overrides.clear()
        self.engine.dispose()

    def register(self, username="alice", email="a@x.com", password="secret1"):
        return self.client.post(
            "/register",
            json={"username": username, "email": email, "password": password},
        )

    def token_for(self, username="alice", email="a@x.com", password="secret1") -> str:
        response = self.register(username, email, password)
        assert response.status_code == 201, response.text
        return response.json()["token"]


def auth_headers(token: str) -> dict:
    return {"x-auth-token": token}
