"""
Pytest configuration and fixtures.
"""
import importlib.util
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

LAMBDA_DIR = os.path.join(os.path.dirname(__file__), '..', 'lambda')


@pytest.fixture(scope="session")
def aws_credentials():
    """Mock AWS credentials for testing."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture(scope="session", autouse=True)
def env_vars():
    """Set up environment variables for tests."""
    os.environ["ENV"] = "test"
    os.environ["AWS_REGION"] = "us-east-1"
    os.environ["CHARACTERS_TABLE_NAME"] = "Characters-test"
    os.environ["AGE_RANGES_TABLE_NAME"] = "AgeRanges-test"
    os.environ["MERGED_RECORDS_TABLE_NAME"] = "MergedRecords-test"
    os.environ["CACHE_TABLE_NAME"] = "HistoryCache-test"
    os.environ["ENABLE_METRICS"] = "false"
    os.environ["JWT_SECRET"] = "test-secret-for-the-merge-api-authorizer"


def load_handler(directory: str):
    """
    Import lambda/<directory>/handler.py under a unique module name.

    Every Lambda ships a module called handler, so they cannot all be
    imported by name in the same test session.
    """
    module_name = f'{directory}_handler_under_test'
    if module_name in sys.modules:
        return sys.modules[module_name]

    handler_path = os.path.join(LAMBDA_DIR, directory, 'handler.py')
    spec = importlib.util.spec_from_file_location(module_name, handler_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


class FakeClock:
    """Settable time source in seconds since epoch."""

    def __init__(self, now: float = 1_700_000_000):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryCacheRepository:
    """Dict-backed stand-in for CacheRepository."""

    def __init__(self):
        self.entries = {}
        self.get_calls = 0
        self.put_calls = 0
        self.deleted = []

    def get(self, cache_key):
        self.get_calls += 1
        return self.entries.get(cache_key)

    def put(self, entry):
        self.put_calls += 1
        self.entries[entry.key] = entry

    def delete(self, cache_key):
        self.deleted.append(cache_key)
        self.entries.pop(cache_key, None)

    def scan_all_keys(self):
        return list(self.entries)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def cache_repository():
    return InMemoryCacheRepository()


@pytest.fixture
def load_lambda():
    """Return the loader for lambda/<directory>/handler.py modules."""
    return load_handler
