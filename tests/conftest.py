"""Root pytest configuration for docker-retag tests."""
import pytest

from docker_retag.registry import RegistryClient, TransportConfig

from .helpers.fake_registry import REGISTRY_URL, FakeRegistry

# Import fixtures to make them available
from .fixtures.oci_registry import oci_registry  # noqa: F401


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires Docker)"
    )


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Keep tests independent of the caller's registry environment."""
    for name in ("DOCKER_REGISTRY", "DOCKER_USER", "DOCKER_PASS", "DOCKER_RETAG_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_registry():
    """Empty fake registry; tests add the routes they need."""
    return FakeRegistry()


@pytest.fixture
def config():
    """Transport config with credentials."""
    return TransportConfig(registry_url=REGISTRY_URL, username="alice", password="s3cret")


@pytest.fixture
def anonymous_config():
    """Transport config without credentials."""
    return TransportConfig(registry_url=REGISTRY_URL)


@pytest.fixture
def client(fake_registry):
    """Registry client with credentials talking to the fake registry."""
    with RegistryClient(REGISTRY_URL, "alice", "s3cret", transport=fake_registry.transport) as c:
        yield c
