import pytest
from fastapi.testclient import TestClient

from timeserver.app import create_app

TIMEZONES = ["Europe/Warsaw", "America/New_York", "UTC"]


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def app():
    return create_app(timezones=TIMEZONES)


@pytest.fixture
def client(app):
    return TestClient(app)
