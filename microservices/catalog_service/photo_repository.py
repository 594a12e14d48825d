"""
Photo Repository - Data access layer for photos

Photos are stored in the photos collection keyed by the integer id field:
    {
        "id": 5, "filename": "beach.jpg", "title": "Beach", "description": "",
        "tags": ["sunset"], "visibility": "public", "ownerID": 42,
        "albums": [1, 3], "date": ISODate(...), "resolution": "1920x1080"
    }

Tag and album-membership adds use $addToSet, so they are atomic and
idempotent: repeating them reports "no change" instead of writing again.
Tag normalization (trim + lowercase) happens here, on every write path.
Documents written before normalization are rewritten in canonical form the
first time a tag is added to them.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from core.config import CatalogCollectionsConfig, get_settings

from .models import Photo, PhotoUploadRequest, SequenceKind, Visibility, normalize_tag, normalize_tags
from .protocols import (
    CatalogValidationError,
    DocumentStoreProtocol,
    IdAllocatorProtocol,
    PhotoNotFoundError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)


class PhotoRepository:
    """Photo repository - data access layer for photo operations"""

    def __init__(
        self,
        store: DocumentStoreProtocol,
        id_allocator: IdAllocatorProtocol,
        collections: Optional[CatalogCollectionsConfig] = None,
    ):
        collections = collections or get_settings().collections
        self.store = store
        self.id_allocator = id_allocator
        self.photos_collection = collections.photos

    @property
    def _photos(self):
        return self.store.collection(self.photos_collection)

    async def ensure_indexes(self):
        """Unique index on id, multikey index on album membership"""
        try:
            await self._photos.create_index([("id", ASCENDING)], unique=True)
            await self._photos.create_index([("albums", ASCENDING)])
        except PyMongoError as e:
            logger.error(f"Error creating photo indexes: {e}")
            raise StoreUnavailableError(f"Failed to create photo indexes: {e}") from e

    # ==================== Reads ====================

    async def get_by_id(self, photo_id: int) -> Optional[Photo]:
        """Get photo by id (no visibility filtering)"""
        doc = await self._find_document(photo_id)
        return Photo.model_validate(doc) if doc else None

    async def _find_document(self, photo_id: int) -> Optional[Dict[str, Any]]:
        try:
            return await self._photos.find_one({"id": photo_id})
        except PyMongoError as e:
            logger.error(f"Error getting photo by ID {photo_id}: {e}")
            raise StoreUnavailableError(f"Failed to get photo {photo_id}: {e}") from e

    async def list_by_album(self, album_id: int) -> List[Photo]:
        """Photos whose albums list contains album_id; empty when none match"""
        return await self._find({"albums": album_id}, f"album {album_id}")

    async def list_all(self) -> List[Photo]:
        """Every photo, unfiltered"""
        return await self._find({}, "all photos")

    async def _find(self, query: Dict[str, Any], label: str) -> List[Photo]:
        try:
            cursor = self._photos.find(query, sort=[("id", ASCENDING)])
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Error listing photos for {label}: {e}")
            raise StoreUnavailableError(f"Failed to list photos: {e}") from e

        return [Photo.model_validate(doc) for doc in docs]

    # ==================== Writes ====================

    async def create(self, photo_data: PhotoUploadRequest, owner_id: int) -> Photo:
        """Allocate an id and insert a photo attached to photo_data.album_id"""
        photo_id = await self.id_allocator.next_id(SequenceKind.PHOTO_ID.value)
        photo = Photo(
            id=photo_id,
            filename=photo_data.filename,
            title=photo_data.title,
            description=photo_data.description,
            tags=normalize_tags(photo_data.tags),
            visibility=photo_data.visibility,
            owner_id=owner_id,
            albums=[photo_data.album_id],
            date=photo_data.date or datetime.now(timezone.utc),
            resolution=photo_data.resolution,
        )

        try:
            await self._photos.insert_one(self._to_document(photo))
        except PyMongoError as e:
            logger.error(f"Error creating photo {photo_data.filename!r}: {e}")
            raise StoreUnavailableError(f"Failed to create photo: {e}") from e

        logger.info(f"Photo created: {photo_id} in album {photo_data.album_id} owner {owner_id}")
        return photo

    @staticmethod
    def _to_document(photo: Photo) -> Dict[str, Any]:
        doc = photo.model_dump(by_alias=True)
        doc["visibility"] = photo.visibility.value
        return doc

    async def update(
        self,
        photo_id: int,
        title: str,
        description: str,
        visibility: Optional[Visibility] = None,
        tags: Optional[List[str]] = None,
    ) -> bool:
        """
        Partial update of title/description and, when given, visibility and tags.

        Tags replace the stored list wholesale (after normalization).

        Returns:
            bool: True if exactly one document was modified; False for an
            unknown id or when nothing changed
        """
        update_data: Dict[str, Any] = {"title": title, "description": description}
        if visibility is not None:
            update_data["visibility"] = Visibility(visibility).value
        if tags is not None:
            update_data["tags"] = normalize_tags(tags)

        try:
            result = await self._photos.update_one({"id": photo_id}, {"$set": update_data})
        except PyMongoError as e:
            logger.error(f"Error updating photo {photo_id}: {e}")
            raise StoreUnavailableError(f"Failed to update photo {photo_id}: {e}") from e

        return result.modified_count == 1

    async def add_tag(self, photo_id: int, tag: str) -> bool:
        """
        Add a tag if it is not already present.

        Returns:
            bool: True if the tag was appended, False if it was already there

        Raises:
            CatalogValidationError: Tag is empty after normalization
            PhotoNotFoundError: Unknown photo id
        """
        value = normalize_tag(tag)
        if not value:
            raise CatalogValidationError("Tag text is required")

        doc = await self._find_document(photo_id)
        if doc is None:
            raise PhotoNotFoundError(f"Photo not found: {photo_id}")

        stored = doc.get("tags") or []
        if stored == normalize_tags(stored):
            result = await self._add_to_set(photo_id, "tags", value)
        else:
            result = await self._rewrite_tags(photo_id, stored, value)
        if result:
            logger.info(f"Tag {value!r} added to photo {photo_id}")
        return result

    async def _rewrite_tags(self, photo_id: int, stored: List[str], value: str) -> bool:
        """Replace a non-canonical tag list with its normalized form plus value"""
        tags = normalize_tags(stored + [value])
        try:
            # Matching on the list read guards against a concurrent tag write
            result = await self._photos.update_one(
                {"id": photo_id, "tags": stored}, {"$set": {"tags": tags}}
            )
        except PyMongoError as e:
            logger.error(f"Error rewriting tags of photo {photo_id}: {e}")
            raise StoreUnavailableError(f"Failed to update photo {photo_id}: {e}") from e

        if result.matched_count == 0:
            return await self.add_tag(photo_id, value)
        logger.info(f"Tags of photo {photo_id} normalized: {stored} -> {tags}")
        return value not in normalize_tags(stored)

    async def add_to_album(self, photo_id: int, album_id: int) -> bool:
        """Attach the photo to an album; False when already a member"""
        result = await self._add_to_set(photo_id, "albums", album_id)
        if result:
            logger.info(f"Photo {photo_id} attached to album {album_id}")
        return result

    async def _add_to_set(self, photo_id: int, field: str, value: Any) -> bool:
        try:
            result = await self._photos.update_one({"id": photo_id}, {"$addToSet": {field: value}})
        except PyMongoError as e:
            logger.error(f"Error adding {field} value to photo {photo_id}: {e}")
            raise StoreUnavailableError(f"Failed to update photo {photo_id}: {e}") from e

        if result.matched_count == 0:
            raise PhotoNotFoundError(f"Photo not found: {photo_id}")
        return result.modified_count == 1
