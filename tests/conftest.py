import pytest

from apidoc.config import ExtractionConfig
from apidoc.core.persistence.store import ModelStore
from apidoc.extracting.strategies.use_api_resource_tags import UseApiResourceTags

from sample_app import User, build_factories, build_types


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # Keep verbosity deterministic regardless of the caller's shell
    monkeypatch.delenv("APIDOC_VERBOSE", raising=False)
    monkeypatch.delenv("APIDOC_CONFIG_FILE", raising=False)


@pytest.fixture()
def factories():
    return build_factories(seed=42)


@pytest.fixture()
def types():
    return build_types()


@pytest.fixture()
def store():
    s = ModelStore()
    User.bind_store(s)
    yield s
    User.bind_store(None)


@pytest.fixture()
def strategy(factories, types):
    return UseApiResourceTags(ExtractionConfig(), factories=factories, types=types)


@pytest.fixture()
def verbose_strategy(factories, types):
    return UseApiResourceTags(ExtractionConfig(verbose=True), factories=factories, types=types)


class FakeRoute:
    def __init__(self, methods, path, endpoint=None):
        self.methods = set(methods)
        self.path = path
        self.endpoint = endpoint


@pytest.fixture()
def route():
    return FakeRoute(["GET", "HEAD"], "/users")
