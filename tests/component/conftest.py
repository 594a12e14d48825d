"""
Component Test Layer Configuration (Layer 3)

Structure:
    tests/component/
    ├── golden/      🔒 Characterization (never modify)
    ├── tdd/         🆕 TDD (new features)
    └── mocks/       Mock implementations

Usage:
    pytest tests/component -v
    pytest tests/component/golden -v
    pytest tests/component/tdd -v
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports
os.environ["ENV"] = "testing"
os.environ["ENVIRONMENT"] = "testing"
os.environ["NATS_ENABLED"] = "false"

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from core.config import CatalogCollectionsConfig

from tests.component.mocks import (
    MockAlbumRepository,
    MockCommentRepository,
    MockDocumentStore,
    MockEventBus,
    MockPhotoRepository,
    MockUserRepository,
)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests"
    )
    config.addinivalue_line(
        "markers", "golden: safety net tests - DO NOT MODIFY"
    )
    config.addinivalue_line(
        "markers", "tdd: new behavior tests"
    )


# =============================================================================
# Store / Bus Mocks
# =============================================================================

@pytest.fixture
def mock_store() -> MockDocumentStore:
    """In-memory document store"""
    return MockDocumentStore()


@pytest.fixture
def mock_event_bus() -> MockEventBus:
    """Mock NATS event bus"""
    return MockEventBus()


@pytest.fixture
def collections() -> CatalogCollectionsConfig:
    """Unprefixed collection names"""
    return CatalogCollectionsConfig()


# =============================================================================
# Repository Mocks
# =============================================================================

@pytest.fixture
def mock_user_repo() -> MockUserRepository:
    return MockUserRepository()


@pytest.fixture
def mock_album_repo() -> MockAlbumRepository:
    return MockAlbumRepository()


@pytest.fixture
def mock_photo_repo() -> MockPhotoRepository:
    return MockPhotoRepository()


@pytest.fixture
def mock_comment_repo() -> MockCommentRepository:
    return MockCommentRepository()


@pytest.fixture
def catalog_service(
    mock_album_repo,
    mock_photo_repo,
    mock_comment_repo,
    mock_user_repo,
    mock_store,
    mock_event_bus,
):
    """CatalogService wired to mock repositories"""
    from microservices.catalog_service.catalog_service import CatalogService

    return CatalogService(
        album_repo=mock_album_repo,
        photo_repo=mock_photo_repo,
        comment_repo=mock_comment_repo,
        user_repo=mock_user_repo,
        store=mock_store,
        event_bus=mock_event_bus,
    )
