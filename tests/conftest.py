import pytest
from fastapi.testclient import TestClient

from receipt_points.app import app, get_store
from receipt_points.store.memory import InMemoryReceiptStore


@pytest.fixture
def store() -> InMemoryReceiptStore:
    return InMemoryReceiptStore()


@pytest.fixture
def client(store: InMemoryReceiptStore):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def target_receipt() -> dict:
    return {
        "retailer": "Target",
        "purchaseDate": "2022-01-01",
        "purchaseTime": "13:01",
        "items": [
            {"shortDescription": "Mountain-Dew-12PK", "price": "6.49"},
            {"shortDescription": "Emils-Cheese-Pizza", "price": "12.25"},
        ],
        "total": "35.35",
    }
