# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from catalog.config import Settings
from catalog.database import ProductStore
from catalog.main import create_app
from catalog.models import ProductIn

API_KEY = "test-key"


def make_product(**overrides):
    data = {
        "name": "Widget",
        "description": "A fine widget",
        "price": 9.99,
        "category": "Tools",
        "stock": 3,
    }
    data.update(overrides)
    return data


@pytest.fixture
def settings():
    return Settings(api_key=API_KEY, app_env="test")


@pytest.fixture
def store():
    return ProductStore([
        ProductIn(name="Red Pen", description="Gel pen", price=1.5, category="Office", stock=10),
        ProductIn(name="Blue Pen", description="Ballpoint pen", price=2.5, category="Office", stock=0),
        ProductIn(name="Coffee Mug", description="Ceramic mug", price=9.75, category="Kitchen", stock=4),
    ])


@pytest.fixture
def client(settings, store):
    return TestClient(create_app(settings, store))


@pytest.fixture
def auth():
    return {"x-api-key": API_KEY}


@pytest.fixture
def payload():
    return make_product


@pytest.fixture
def api_key():
    return API_KEY
