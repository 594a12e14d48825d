"""
Component Test Mocks

Shared mock implementations for component testing.
These mocks replace real I/O dependencies (MongoDB, NATS).
"""

from .db_mock import MockCollection, MockDocumentStore
from .nats_mock import MockEventBus
from .catalog_mocks import (
    MockAlbumRepository,
    MockCommentRepository,
    MockPhotoRepository,
    MockUserRepository,
)

__all__ = [
    'MockCollection',
    'MockDocumentStore',
    'MockEventBus',
    'MockAlbumRepository',
    'MockCommentRepository',
    'MockPhotoRepository',
    'MockUserRepository',
]
