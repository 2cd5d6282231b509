import pytest
from fastapi.testclient import TestClient

TOKEN = "0123456789abcdef" * 4


@pytest.fixture
def token() -> str:
    return TOKEN


@pytest.fixture
def client():
    from main import app

    with TestClient(app) as c:
        yield c
