"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers (Top-Down TDD):
    - api/        : HTTP contract tests (in-process app, service mocked)
    - component/  : Component tests (in-memory document store, mocked bus)
    - unit/       : Unit tests (pure functions, no I/O)
"""
import os
import sys

import pytest

# Testing environment before any project imports read settings
os.environ.setdefault("ENV", "testing")
os.environ.setdefault("NATS_ENABLED", "false")

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

# Import shared fixtures from tests/fixtures
from tests.fixtures import (
    make_owner_id,
    make_username,
    make_viewer,
)


# =============================================================================
# Test Configuration
# =============================================================================

class TestConfig:
    """Centralized test configuration"""

    SERVICE_NAME = "catalog_service"
    SERVICE_PORT = 8000

    # Infrastructure (only used by tests that opt into a live store)
    MONGODB_URL = os.getenv("MONGODB_URL", "mongodb://localhost:27017")
    NATS_URL = os.getenv("NATS_URL", "nats://localhost:4222")

    # Timeouts
    HTTP_TIMEOUT = 30


@pytest.fixture(scope="session")
def test_config() -> TestConfig:
    """Provide test configuration"""
    return TestConfig()


# =============================================================================
# Identity Fixtures
# =============================================================================

@pytest.fixture
def owner():
    """The viewer who owns the test photos (ownerID 42)"""
    return make_viewer(owner_id=42, username="alice")


@pytest.fixture
def stranger():
    """A viewer who owns nothing"""
    return make_viewer(owner_id=7, username="bob")


@pytest.fixture
def random_viewer():
    """A fresh, unique viewer"""
    return make_viewer(owner_id=make_owner_id(), username=make_username())
