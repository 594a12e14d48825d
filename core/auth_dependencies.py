"""
FastAPI Authentication Dependencies for the Catalog

The catalog never authenticates anyone itself. The fronting auth layer
(gateway or login service) forwards the acting identity in headers:

    X-Owner-Id: 42
    X-Username: alice

User registration is a service-to-service call from that auth layer and
carries the shared internal secret instead.
"""

from fastapi import Header, HTTPException, status, Request
from typing import Optional
import logging
import os

from microservices.catalog_service.models import Viewer

logger = logging.getLogger(__name__)

# Internal service auth
INTERNAL_SERVICE_SECRET = os.getenv(
    "INTERNAL_SERVICE_SECRET",
    "dev-internal-secret-change-in-production"
)


async def require_viewer(
    x_owner_id: Optional[int] = Header(None, alias="X-Owner-Id"),
    x_username: Optional[str] = Header(None, alias="X-Username"),
) -> Viewer:
    """
    Dependency: the acting identity, required.

    Raises:
        HTTPException 401: Either header is missing

    Usage:
        @app.get("/api/v1/photos/{photo_id}")
        async def get_photo(photo_id: int, viewer: Viewer = Depends(require_viewer)):
            ...
    """
    if x_owner_id is None or not x_username:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User authentication required"
        )

    return Viewer(owner_id=x_owner_id, username=x_username)


async def require_internal_service(
    request: Request,
    x_internal_service: Optional[str] = Header(None, alias="X-Internal-Service"),
    x_internal_service_secret: Optional[str] = Header(None, alias="X-Internal-Service-Secret"),
) -> str:
    """
    Dependency: only the auth layer may call this route.

    Returns:
        "internal-service"

    Raises:
        HTTPException 401: Missing or wrong secret
    """
    if x_internal_service == "true" and x_internal_service_secret:
        if x_internal_service_secret == INTERNAL_SERVICE_SECRET:
            logger.debug(f"Internal service request to {request.url.path}")
            return "internal-service"
        client_host = request.client.host if request.client else "unknown"
        logger.warning(f"Invalid internal service secret from {client_host}")

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Internal service authentication required"
    )


__all__ = [
    "require_viewer",
    "require_internal_service",
]
