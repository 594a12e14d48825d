"""
Comment Repository - Data access layer for photo comments

Comments have no id of their own; they are keyed by photoId and listed in
insertion order (date, then the store's insertion-ordered _id).
Photo existence is not checked here.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from core.config import CatalogCollectionsConfig, get_settings

from .models import Comment
from .protocols import DocumentStoreProtocol, StoreUnavailableError

logger = logging.getLogger(__name__)


class CommentRepository:
    """Comment repository - append-only comment storage"""

    def __init__(
        self,
        store: DocumentStoreProtocol,
        collections: Optional[CatalogCollectionsConfig] = None,
    ):
        collections = collections or get_settings().collections
        self.store = store
        self.comments_collection = collections.comments

    @property
    def _comments(self):
        return self.store.collection(self.comments_collection)

    async def ensure_indexes(self):
        try:
            await self._comments.create_index([("photoId", ASCENDING), ("date", ASCENDING)])
        except PyMongoError as e:
            logger.error(f"Error creating comment indexes: {e}")
            raise StoreUnavailableError(f"Failed to create comment indexes: {e}") from e

    async def list_by_photo(self, photo_id: int) -> List[Comment]:
        """Comments for a photo, oldest first"""
        try:
            cursor = self._comments.find(
                {"photoId": photo_id},
                sort=[("date", ASCENDING), ("_id", ASCENDING)],
            )
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Error listing comments for photo {photo_id}: {e}")
            raise StoreUnavailableError(f"Failed to list comments: {e}") from e

        return [Comment.model_validate(doc) for doc in docs]

    async def append(self, photo_id: int, username: str, text: str) -> Comment:
        """Append a comment stamped with the current time"""
        comment = Comment(
            photo_id=photo_id,
            username=username,
            text=text,
            date=datetime.now(timezone.utc),
        )

        try:
            await self._comments.insert_one(comment.model_dump(by_alias=True))
        except PyMongoError as e:
            logger.error(f"Error adding comment to photo {photo_id}: {e}")
            raise StoreUnavailableError(f"Failed to add comment: {e}") from e

        logger.info(f"Comment added to photo {photo_id} by {username}")
        return comment
