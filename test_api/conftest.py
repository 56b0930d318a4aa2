"""
Pytest Configuration and Fixtures for the Contract Harness Tests

Shared fixtures: the fixed identities, a fresh seeded reference service per
test, async clients bound to it through httpx.ASGITransport, and a helper for
clients backed by httpx.MockTransport.
"""

import pytest
import httpx
import os

# Set test environment variables before importing the service
os.environ.setdefault("SECRET_KEY", "test_secret_key_for_testing_purposes_only_12345")
os.environ.setdefault("ALGORITHM", "HS256")
os.environ.setdefault("ACCESS_TOKEN_EXPIRE_MINUTES", "60")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from app import create_app
from auth_contract.config.settings import load_identities
from auth_contract.models.models import Identity, RunState
from auth_contract.src.scenario import RunContext


@pytest.fixture
def identities():
    """The ordinary and administrator identities of a run."""
    return load_identities()


@pytest.fixture
def test_app():
    """Freshly seeded reference service."""
    return create_app()


@pytest.fixture
async def async_test_client(test_app):
    """Async client talking to the reference service in-process."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def run_context(async_test_client, identities):
    """Run context with empty tokens."""
    return RunContext(client=async_test_client, identities=identities, state=RunState())


@pytest.fixture
def sample_identity():
    return Identity(email="gin@ex.com", username="ginuser", password="pw123")


# Helper functions for tests
def mock_client(handler):
    """Async client whose responses come from `handler(request)`."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")


# Pytest configuration
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "live: mark test as requiring a deployed target")
