import pytest

from app import create_app
from database.db import db

TEST_SECRET = "test-secret"


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "JWT_SECRET": TEST_SECRET,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "EVENT_LOGGING": False,
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register(client):
    """Register a provider over HTTP and return the response body."""
    def _register(email="alice@example.com", role="driver", name="Alice",
                  password="secret123", phone="555-0100"):
        resp = client.post("/api/auth/register", json={
            "name": name,
            "email": email,
            "password": password,
            "role": role,
            "phone": phone,
        })
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()
    return _register


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_booking(client):
    def _make_booking(provider_user_id, service_type="driver", **overrides):
        body = {
            "customer_name": "Bob",
            "customer_phone": "555-0199",
            "service_type": service_type,
            "serviceProviderUniqueId": provider_user_id,
            "date": "2024-06-01",
            "time": "10:00",
            "address": "1 Main St",
        }
        body.update(overrides)
        resp = client.post("/api/bookings", json=body)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()["booking"]
    return _make_booking
