"""
API Test Layer Configuration

Layer 1: API Contract Tests
- Requests go through the real FastAPI app in-process (httpx ASGITransport)
- CatalogService is wired to mock repositories via dependency_overrides
- Validates routing, identity headers, status codes and JSON shapes

Usage:
    pytest tests/api -v                    # Run all API tests
    pytest tests/api -v -k "photo"         # Run photo API tests
    pytest tests/api -v --tb=short         # Short traceback
"""

import os
import sys
from types import SimpleNamespace
from typing import AsyncGenerator, Dict

import httpx
import pytest
import pytest_asyncio

# Testing environment before the app module reads settings
os.environ["ENV"] = "testing"
os.environ["NATS_ENABLED"] = "false"

# Add project root
sys.path.insert(
    0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
)

from tests.component.mocks import (
    MockAlbumRepository,
    MockCommentRepository,
    MockDocumentStore,
    MockEventBus,
    MockPhotoRepository,
    MockUserRepository,
)


# =============================================================================
# Configuration
# =============================================================================


class APITestConfig:
    """API test configuration"""

    BASE_URL = "http://testserver"
    HTTP_TIMEOUT = 30.0

    @staticmethod
    def viewer_headers(owner_id: int, username: str) -> Dict[str, str]:
        """Identity headers forwarded by the auth layer"""
        return {"X-Owner-Id": str(owner_id), "X-Username": username}

    @staticmethod
    def internal_headers() -> Dict[str, str]:
        from core.auth_dependencies import INTERNAL_SERVICE_SECRET

        return {"X-Internal-Service": "true", "X-Internal-Service-Secret": INTERNAL_SERVICE_SECRET}


def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line("markers", "api: marks tests as API contract tests")


# =============================================================================
# App / Backend Fixtures
# =============================================================================


@pytest.fixture
def catalog_backend() -> SimpleNamespace:
    """Mock repositories plus the CatalogService built on them"""
    from microservices.catalog_service.catalog_service import CatalogService

    backend = SimpleNamespace(
        albums=MockAlbumRepository(),
        photos=MockPhotoRepository(),
        comments=MockCommentRepository(),
        users=MockUserRepository(),
        store=MockDocumentStore(),
        event_bus=MockEventBus(),
    )
    backend.service = CatalogService(
        album_repo=backend.albums,
        photo_repo=backend.photos,
        comment_repo=backend.comments,
        user_repo=backend.users,
        store=backend.store,
        event_bus=backend.event_bus,
    )
    return backend


@pytest_asyncio.fixture
async def http_client(catalog_backend) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async HTTP client bound to the app in-process"""
    from microservices.catalog_service.main import app, get_catalog_service

    app.dependency_overrides[get_catalog_service] = lambda: catalog_backend.service
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport,
        base_url=APITestConfig.BASE_URL,
        timeout=APITestConfig.HTTP_TIMEOUT,
    ) as client:
        yield client
    app.dependency_overrides.clear()


# =============================================================================
# Service-Specific Client
# =============================================================================


class APIClient:
    """API client for one route prefix, acting as one viewer"""

    def __init__(self, http_client: httpx.AsyncClient, api_path: str, headers: Dict[str, str]):
        self.client = http_client
        self.api_path = api_path
        self.headers = headers

    def as_viewer(self, owner_id: int, username: str) -> "APIClient":
        return APIClient(self.client, self.api_path, APITestConfig.viewer_headers(owner_id, username))

    def anonymous(self) -> "APIClient":
        return APIClient(self.client, self.api_path, {})

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        headers = {**self.headers, **kwargs.pop("headers", {})}
        return await self.client.request(method, f"{self.api_path}{path}", headers=headers, **kwargs)

    async def get(self, path: str = "", **kwargs) -> httpx.Response:
        return await self._request("GET", path, **kwargs)

    async def post(self, path: str = "", **kwargs) -> httpx.Response:
        return await self._request("POST", path, **kwargs)

    async def put(self, path: str = "", **kwargs) -> httpx.Response:
        return await self._request("PUT", path, **kwargs)

    async def get_raw(self, path: str = "", **kwargs) -> httpx.Response:
        """GET request to raw path (bypasses api_path)"""
        return await self.client.get(path, **kwargs)


@pytest_asyncio.fixture
async def catalog_api(http_client: httpx.AsyncClient) -> APIClient:
    """Catalog API client acting as alice (ownerID 42)"""
    return APIClient(http_client, "/api/v1", APITestConfig.viewer_headers(42, "alice"))


# =============================================================================
# Assertion Helpers
# =============================================================================


class APIAssertions:
    """API-specific assertion helpers"""

    @staticmethod
    def assert_success(response: httpx.Response, expected_status: int = 200):
        """Assert response is successful"""
        assert response.status_code == expected_status, (
            f"Expected {expected_status}, got {response.status_code}: {response.text}"
        )

    @staticmethod
    def assert_created(response: httpx.Response):
        """Assert resource was created"""
        assert response.status_code == 201, (
            f"Expected 201, got {response.status_code}: {response.text}"
        )

    @staticmethod
    def assert_not_found(response: httpx.Response):
        """Assert resource not found"""
        assert response.status_code == 404, f"Expected 404, got {response.status_code}"

    @staticmethod
    def assert_forbidden(response: httpx.Response):
        """Assert ownership/visibility refusal"""
        assert response.status_code == 403, f"Expected 403, got {response.status_code}"

    @staticmethod
    def assert_bad_request(response: httpx.Response):
        """Assert domain validation error"""
        assert response.status_code == 400, f"Expected 400, got {response.status_code}: {response.text}"

    @staticmethod
    def assert_validation_error(response: httpx.Response):
        """Assert request schema validation error"""
        assert response.status_code == 422, f"Expected 422, got {response.status_code}"

    @staticmethod
    def assert_unauthorized(response: httpx.Response):
        """Assert unauthorized"""
        assert response.status_code == 401, f"Expected 401, got {response.status_code}"

    @staticmethod
    def assert_has_fields(data: dict, fields: list):
        """Assert response has required fields"""
        missing = [f for f in fields if f not in data]
        assert not missing, f"Missing fields: {missing}"


@pytest.fixture
def api_assert() -> APIAssertions:
    """Provide API assertion helpers"""
    return APIAssertions()


@pytest.fixture
def internal_headers() -> Dict[str, str]:
    """Headers the auth layer sends on service-to-service calls"""
    return APITestConfig.internal_headers()
