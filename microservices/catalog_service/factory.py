"""
Catalog Service Factory

Factory functions for creating service instances with real dependencies.
This is the ONLY place that imports I/O-dependent modules (repositories,
MongoDB client).

Usage:
    from .factory import create_catalog_service
    service = create_catalog_service(config, event_bus)
    await service.initialize()
"""
from typing import Optional

from core.config import CatalogConfig, get_settings

from .catalog_service import CatalogService


def create_catalog_service(
    config: Optional[CatalogConfig] = None,
    event_bus=None,
    store=None,
) -> CatalogService:
    """
    Create CatalogService with real dependencies.

    All repositories share one store handle and one ID allocator, so
    there is a single connection per process.
    Use this in production, NOT in tests.

    Args:
        config: Optional CatalogConfig instance
        event_bus: Optional event bus for publishing events
        store: Optional document store override

    Returns:
        CatalogService: Configured service instance with real repositories
    """
    # Import real repositories here (not at module level)
    from core.mongo_client import get_mongo_client

    from .album_repository import AlbumRepository
    from .comment_repository import CommentRepository
    from .id_allocator import IdAllocator
    from .photo_repository import PhotoRepository
    from .user_repository import UserRepository

    config = config or get_settings()
    if store is None:
        infra = config.infrastructure
        store = get_mongo_client(
            config.service_name,
            url=infra.mongodb_uri,
            database=infra.mongodb_database,
            timeout_ms=infra.mongodb_timeout_ms,
        )

    collections = config.collections
    id_allocator = IdAllocator(store, collections=collections)

    return CatalogService(
        album_repo=AlbumRepository(store, id_allocator, collections=collections),
        photo_repo=PhotoRepository(store, id_allocator, collections=collections),
        comment_repo=CommentRepository(store, collections=collections),
        user_repo=UserRepository(store, id_allocator, collections=collections),
        store=store,
        event_bus=event_bus,
    )
