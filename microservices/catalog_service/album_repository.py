"""
Album Repository - Data access layer for albums

Albums are stored in the albums collection keyed by the integer id field:
    { "id": 1, "name": "Summer", "ownerID": 42 }

Uses the shared MongoClientWrapper handle; IDs come from the IdAllocator.
"""

import logging
from typing import List, Optional

from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from core.config import CatalogCollectionsConfig, get_settings

from .models import Album, SequenceKind
from .protocols import DocumentStoreProtocol, IdAllocatorProtocol, StoreUnavailableError

logger = logging.getLogger(__name__)


class AlbumRepository:
    """Album repository - data access layer for album operations"""

    def __init__(
        self,
        store: DocumentStoreProtocol,
        id_allocator: IdAllocatorProtocol,
        collections: Optional[CatalogCollectionsConfig] = None,
    ):
        collections = collections or get_settings().collections
        self.store = store
        self.id_allocator = id_allocator
        self.albums_collection = collections.albums

    @property
    def _albums(self):
        return self.store.collection(self.albums_collection)

    async def ensure_indexes(self):
        """Unique index on id; name is indexed for by-name lookup but not unique"""
        try:
            await self._albums.create_index([("id", ASCENDING)], unique=True)
            await self._albums.create_index([("name", ASCENDING)])
        except PyMongoError as e:
            logger.error(f"Error creating album indexes: {e}")
            raise StoreUnavailableError(f"Failed to create album indexes: {e}") from e

    async def get_all(self) -> List[Album]:
        """List every album ordered by id"""
        try:
            cursor = self._albums.find({}, sort=[("id", ASCENDING)])
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Error listing albums: {e}")
            raise StoreUnavailableError(f"Failed to list albums: {e}") from e

        return [Album.model_validate(doc) for doc in docs]

    async def get_by_id(self, album_id: int) -> Optional[Album]:
        """Get album by id"""
        try:
            doc = await self._albums.find_one({"id": album_id})
        except PyMongoError as e:
            logger.error(f"Error getting album by ID {album_id}: {e}")
            raise StoreUnavailableError(f"Failed to get album {album_id}: {e}") from e

        return Album.model_validate(doc) if doc else None

    async def get_by_name(self, name: str) -> Optional[Album]:
        """Get the first album (lowest id) with exactly this name"""
        try:
            doc = await self._albums.find_one({"name": name}, sort=[("id", ASCENDING)])
        except PyMongoError as e:
            logger.error(f"Error getting album by name {name!r}: {e}")
            raise StoreUnavailableError(f"Failed to get album {name!r}: {e}") from e

        return Album.model_validate(doc) if doc else None

    async def create(self, name: str, owner_id: int) -> Album:
        """Allocate an id and insert a new album"""
        album_id = await self.id_allocator.next_id(SequenceKind.ALBUM_ID.value)
        album = Album(id=album_id, name=name, owner_id=owner_id)

        try:
            await self._albums.insert_one(album.model_dump(by_alias=True))
        except PyMongoError as e:
            logger.error(f"Error creating album {name!r}: {e}")
            raise StoreUnavailableError(f"Failed to create album: {e}") from e

        logger.info(f"Album created: {album_id} ({name!r}) owner {owner_id}")
        return album
