"""
Catalog Microservice

Photo catalog service: albums, photos, tags, comments and search,
with per-photo visibility enforced against the forwarded viewer identity.

Port: 8000
"""

import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse

from core.auth_dependencies import require_internal_service, require_viewer
from core.config import get_settings
from core.logger import setup_service_logger
from core.nats_client import get_event_bus

from .catalog_service import CatalogService
from .factory import create_catalog_service
from .models import (
    Album,
    AlbumCreateRequest,
    AlbumListResponse,
    AlbumPhotosResponse,
    CatalogServiceStatus,
    Comment,
    CommentCreateRequest,
    CommentListResponse,
    MutationResponse,
    Photo,
    PhotoAttachRequest,
    PhotoListResponse,
    PhotoUpdateRequest,
    PhotoUploadRequest,
    TagAddRequest,
    UserRegisterRequest,
    UserResponse,
    Viewer,
)
from .protocols import (
    CatalogServiceError,
    CatalogValidationError,
    DuplicateNameError,
    NotFoundError,
    PhotoPermissionError,
    StoreUnavailableError,
)

# Initialize configuration
settings = get_settings()

# Setup loggers
app_logger = setup_service_logger("catalog_service", settings.logging)
logger = app_logger

# Global service instance
catalog_service: Optional[CatalogService] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    global catalog_service

    logger.info("Starting Catalog Service...")

    # Initialize event bus
    event_bus = None
    if settings.infrastructure.nats_enabled:
        try:
            event_bus = await get_event_bus("catalog_service", settings.infrastructure)
            logger.info("✅ Event bus initialized successfully")
        except Exception as e:
            logger.warning(
                f"⚠️  Failed to initialize event bus: {e}. Continuing without event publishing."
            )
            event_bus = None

    # Initialize service with one shared store handle
    catalog_service = create_catalog_service(settings, event_bus=event_bus)

    # Check database connection
    db_connected = await catalog_service.check_connection()
    if not db_connected:
        logger.error("Failed to connect to database")
        raise RuntimeError("Database connection failed")

    await catalog_service.initialize()

    logger.info(f"Catalog Service started on port {settings.service_port}")

    yield

    # Cleanup
    if event_bus:
        try:
            await event_bus.close()
            logger.info("Event bus closed")
        except Exception as e:
            logger.error(f"Error closing event bus: {e}")

    try:
        await catalog_service.close()
    except Exception as e:
        logger.error(f"Error closing document store: {e}")

    logger.info("Catalog Service stopped")


# Initialize FastAPI app
app = FastAPI(
    title="Catalog Service",
    description="Photo albums, photos, tags and comments",
    version="1.0.0",
    lifespan=lifespan,
)


# ==================== Dependency Injection ====================


def get_catalog_service() -> CatalogService:
    """Get catalog service instance"""
    if catalog_service is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return catalog_service


def _to_http_error(e: CatalogServiceError) -> HTTPException:
    """Map domain errors to HTTP status codes"""
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, PhotoPermissionError):
        return HTTPException(status_code=403, detail=str(e))
    if isinstance(e, CatalogValidationError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, DuplicateNameError):
        return HTTPException(status_code=409, detail=str(e))
    if isinstance(e, StoreUnavailableError):
        return HTTPException(status_code=503, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


# ==================== Health Check ====================


@app.get("/", response_model=CatalogServiceStatus)
async def root(service: CatalogService = Depends(get_catalog_service)):
    """Root endpoint - service status"""
    db_connected = await service.check_connection()
    return CatalogServiceStatus(
        service="catalog_service",
        status="operational" if db_connected else "degraded",
        port=settings.service_port,
        version="1.0.0",
        database_connected=db_connected,
        timestamp=datetime.now(timezone.utc),
    )


@app.get("/health")
async def health_check(service: CatalogService = Depends(get_catalog_service)):
    """Health check endpoint"""
    db_connected = await service.check_connection()
    health = {
        "status": "healthy" if db_connected else "unhealthy",
        "service": "catalog_service",
        "database": "connected" if db_connected else "disconnected",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    status_code = 200 if db_connected else 503
    return JSONResponse(content=health, status_code=status_code)


# ==================== Albums ====================


@app.get("/api/v1/albums", response_model=AlbumListResponse)
async def list_albums(
    viewer: Viewer = Depends(require_viewer),
    service: CatalogService = Depends(get_catalog_service),
):
    """List every album"""
    try:
        albums = await service.list_albums()
        return AlbumListResponse(albums=albums, count=len(albums))
    except CatalogServiceError as e:
        raise _to_http_error(e)


@app.post("/api/v1/albums", response_model=Album, status_code=201)
async def create_album(
    request: AlbumCreateRequest,
    viewer: Viewer = Depends(require_viewer),
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Create a new album owned by the viewer

    Returns:
        Created album with its allocated id
    """
    try:
        return await service.create_album(request, viewer)
    except CatalogServiceError as e:
        raise _to_http_error(e)


@app.get("/api/v1/albums/by-name/{name}", response_model=Album)
async def get_album_by_name(
    name: str,
    viewer: Viewer = Depends(require_viewer),
    service: CatalogService = Depends(get_catalog_service),
):
    """Get the first album with this exact name"""
    try:
        return await service.get_album_by_name(name)
    except CatalogServiceError as e:
        raise _to_http_error(e)


@app.get("/api/v1/albums/{album_id}", response_model=Album)
async def get_album(
    album_id: int,
    viewer: Viewer = Depends(require_viewer),
    service: CatalogService = Depends(get_catalog_service),
):
    """Get album by ID"""
    try:
        return await service.get_album(album_id)
    except CatalogServiceError as e:
        raise _to_http_error(e)


@app.get("/api/v1/albums/{album_id}/photos", response_model=AlbumPhotosResponse)
async def get_album_photos(
    album_id: int,
    viewer: Viewer = Depends(require_viewer),
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Album view: the album plus the photos the viewer may see

    Private photos of other owners are silently left out.
    """
    try:
        album = await service.get_album(album_id)
        photos = await service.list_photos(album_id, viewer)
        return AlbumPhotosResponse(album=album, photos=photos, count=len(photos))
    except CatalogServiceError as e:
        raise _to_http_error(e)


# ==================== Photos ====================


@app.post("/api/v1/photos", response_model=Photo, status_code=201)
async def upload_photo(
    request: PhotoUploadRequest,
    viewer: Viewer = Depends(require_viewer),
    service: CatalogService = Depends(get_catalog_service),
):
    """Register photo metadata in an existing album"""
    try:
        return await service.upload_photo(request, viewer)
    except CatalogServiceError as e:
        raise _to_http_error(e)


@app.get("/api/v1/photos/search", response_model=PhotoListResponse)
async def search_photos(
    q: str = Query(..., description="Text matched against title, description and tags"),
    viewer: Viewer = Depends(require_viewer),
    service: CatalogService = Depends(get_catalog_service),
):
    """Search public photos"""
    try:
        photos = await service.search(q, viewer)
        return PhotoListResponse(photos=photos, count=len(photos))
    except CatalogServiceError as e:
        raise _to_http_error(e)


@app.get("/api/v1/photos/{photo_id}", response_model=Photo)
async def get_photo(
    photo_id: int,
    viewer: Viewer = Depends(require_viewer),
    service: CatalogService = Depends(get_catalog_service),
):
    """Get photo details; 403 for another owner's private photo"""
    try:
        return await service.get_photo(photo_id, viewer)
    except CatalogServiceError as e:
        raise _to_http_error(e)


@app.put("/api/v1/photos/{photo_id}", response_model=MutationResponse)
async def update_photo(
    photo_id: int,
    request: PhotoUpdateRequest,
    viewer: Viewer = Depends(require_viewer),
    service: CatalogService = Depends(get_catalog_service),
):
    """Update photo details (owner only)"""
    try:
        changed = await service.update_photo(photo_id, viewer, request)
        return MutationResponse(
            changed=changed,
            message=f"Photo {photo_id} updated" if changed else f"Photo {photo_id} unchanged",
        )
    except CatalogServiceError as e:
        raise _to_http_error(e)


@app.post("/api/v1/photos/{photo_id}/tags", response_model=MutationResponse)
async def add_tag(
    photo_id: int,
    request: TagAddRequest,
    viewer: Viewer = Depends(require_viewer),
    service: CatalogService = Depends(get_catalog_service),
):
    """Add a tag (owner only); repeating it is a no-op"""
    try:
        changed = await service.add_tag(photo_id, request.tag, viewer)
        return MutationResponse(
            changed=changed,
            message="Tag added" if changed else "Tag already present",
        )
    except CatalogServiceError as e:
        raise _to_http_error(e)


@app.post("/api/v1/photos/{photo_id}/albums", response_model=MutationResponse)
async def add_photo_to_album(
    photo_id: int,
    request: PhotoAttachRequest,
    viewer: Viewer = Depends(require_viewer),
    service: CatalogService = Depends(get_catalog_service),
):
    """Attach a photo to another album (owner only)"""
    try:
        changed = await service.add_photo_to_album(photo_id, request.album_id, viewer)
        return MutationResponse(
            changed=changed,
            message=f"Photo added to album {request.album_id}" if changed
            else f"Photo already in album {request.album_id}",
        )
    except CatalogServiceError as e:
        raise _to_http_error(e)


# ==================== Comments ====================


@app.get("/api/v1/photos/{photo_id}/comments", response_model=CommentListResponse)
async def list_comments(
    photo_id: int,
    viewer: Viewer = Depends(require_viewer),
    service: CatalogService = Depends(get_catalog_service),
):
    """Comments in posting order"""
    try:
        comments = await service.list_comments(photo_id)
        return CommentListResponse(photo_id=photo_id, comments=comments, count=len(comments))
    except CatalogServiceError as e:
        raise _to_http_error(e)


@app.post("/api/v1/photos/{photo_id}/comments", response_model=Comment, status_code=201)
async def add_comment(
    photo_id: int,
    request: CommentCreateRequest,
    viewer: Viewer = Depends(require_viewer),
    service: CatalogService = Depends(get_catalog_service),
):
    """Post a comment as the viewer"""
    try:
        return await service.add_comment(photo_id, viewer, request.text)
    except CatalogServiceError as e:
        raise _to_http_error(e)


# ==================== Users ====================


@app.post("/api/v1/users", response_model=UserResponse, status_code=201)
async def register_user(
    request: UserRegisterRequest,
    caller: str = Depends(require_internal_service),
    service: CatalogService = Depends(get_catalog_service),
):
    """Register a user (called by the auth layer with a pre-hashed password)"""
    try:
        user = await service.register_user(request)
        return UserResponse(
            owner_id=user.owner_id, username=user.username, name=user.name, email=user.email
        )
    except CatalogServiceError as e:
        raise _to_http_error(e)


@app.get("/api/v1/users/{username}", response_model=UserResponse)
async def get_user(
    username: str,
    viewer: Viewer = Depends(require_viewer),
    service: CatalogService = Depends(get_catalog_service),
):
    """Public profile fields for a username"""
    try:
        user = await service.get_user(username)
        return UserResponse(
            owner_id=user.owner_id, username=user.username, name=user.name, email=user.email
        )
    except CatalogServiceError as e:
        raise _to_http_error(e)


# ==================== Run Server ====================

if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("CATALOG_SERVICE_PORT", str(settings.service_port)))
    uvicorn.run(
        "microservices.catalog_service.main:app",
        host=settings.service_host,
        port=port,
        reload=settings.debug,
        log_level="info",
    )
