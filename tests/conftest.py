# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from catalog_api.config import Settings
from catalog_api.main import create_app

TOKEN = "secret-token"
AUTH = {"Authorization": f"Bearer {TOKEN}"}


@pytest.fixture
def settings():
    return Settings(api_token=TOKEN, port=3000)


@pytest.fixture
def app(settings):
    return create_app(settings=settings)


@pytest.fixture
def client(app):
    return TestClient(app)
