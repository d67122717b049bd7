import pytest
from fastapi.testclient import TestClient

from storefront.api.deps import get_sessions
from storefront.core.sessions import SessionStore
from storefront.db.storage import FileStorage, get_storage
from storefront.main import app
from storefront.models.schemas import ProductIn

ADDRESS = {
    "street": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "zipCode": "62701",
    "country": "US",
}

CARD = {
    "cardNumber": "4242424242424242",
    "expiryDate": "12/29",
    "cvv": "123",
    "cardholderName": "Ada Lovelace",
}


def product_data(**overrides):
    data = {
        "name": "Ultrabook 14",
        "description": "Thin and light laptop",
        "price": 999.0,
        "category": "laptops",
        "images": ["https://img.example/ultrabook.jpg"],
        "stock": 5,
        "tags": ["portable"],
    }
    data.update(overrides)
    return data


@pytest.fixture
def storage(tmp_path):
    return FileStorage(str(tmp_path / "data"))


@pytest.fixture
def sessions():
    return SessionStore()


@pytest.fixture
def make_client(storage, sessions):
    """Build TestClients sharing one app; each keeps its own cookie jar."""
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_sessions] = lambda: sessions
    clients = []

    def factory():
        c = TestClient(app)
        clients.append(c)
        return c

    yield factory
    for c in clients:
        c.close()
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def register():
    def _register(client, email="ada@techtreasure.io", password="secret123", **extra):
        payload = {"email": email, "password": password, "firstName": "Ada", "lastName": "Lovelace", **extra}
        resp = client.post("/api/auth/register", json=payload)
        assert resp.status_code == 200, resp.text
        return resp.json()["user"]
    return _register


@pytest.fixture
def add_product(storage):
    def _add(**overrides):
        return storage.create_product(ProductIn.model_validate(product_data(**overrides)))
    return _add


@pytest.fixture
def checkout_payload():
    return {"shippingAddress": dict(ADDRESS), "paymentMethod": dict(CARD)}
