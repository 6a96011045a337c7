import pytest
from fastapi.testclient import TestClient

from bookstore.api import create_app
from bookstore.config import Settings
from bookstore.container import build_default_container


@pytest.fixture
def test_settings():
    return Settings(hello_path="/hello", generic_path="/generic")


@pytest.fixture
def container(test_settings):
    # Fresh container per test so lifecycle state never leaks between tests
    container = build_default_container(test_settings)
    container.start()
    yield container
    container.shutdown()


@pytest.fixture
def client(test_settings):
    app = create_app(build_default_container(test_settings), settings=test_settings)
    # Entering the client runs the lifespan, which starts the container
    with TestClient(app) as test_client:
        yield test_client
